import os


def get_database_uri():
    """
    Resolve the relational store URI.
    DATABASE_URL wins; otherwise compose a PostgreSQL URI from its parts.
    """
    url = os.environ.get('DATABASE_URL')
    if url:
        return url

    user = os.environ.get('DATABASE_USER', 'postgres')
    password = os.environ.get('DATABASE_PASSWORD', 'postgres')
    host = os.environ.get('DATABASE_HOST', 'localhost')
    port = os.environ.get('DATABASE_PORT', '5432')
    database = os.environ.get('DATABASE_NAME', 'church_inventory')
    return f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{database}"


class Config:
    """Base configuration"""

    # Flask
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Database
    SQLALCHEMY_DATABASE_URI = None  # Resolved in create_app
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
    }
    STORE_READ_RETRIES = int(os.environ.get('STORE_READ_RETRIES', 2))
    STORE_RETRY_DELAY_SECONDS = float(os.environ.get('STORE_RETRY_DELAY_SECONDS', 0.2))

    # Auth and blob storage collaborator
    SUPABASE_URL = os.environ.get('SUPABASE_URL')
    SUPABASE_SERVICE_ROLE_KEY = os.environ.get('SUPABASE_SERVICE_ROLE_KEY')
    SUPABASE_ANON_KEY = os.environ.get('SUPABASE_ANON_KEY')
    PHOTO_BUCKET = os.environ.get('PHOTO_BUCKET', 'item-photos')
    EXTERNAL_TIMEOUT_SECONDS = int(os.environ.get('EXTERNAL_TIMEOUT_SECONDS', 5))

    # Pagination
    DEFAULT_PAGE_SIZE = int(os.environ.get('DEFAULT_PAGE_SIZE', 8))
    MAX_PAGE_SIZE = int(os.environ.get('MAX_PAGE_SIZE', 100))

    # Reports
    RECENT_MAINTENANCE_LIMIT = int(os.environ.get('RECENT_MAINTENANCE_LIMIT', 5))

    # CORS
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*').split(',')

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    LOG_LEVEL = 'DEBUG'


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    # Use in-memory SQLite for testing
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    SUPABASE_URL = 'http://auth.test'
    SUPABASE_SERVICE_ROLE_KEY = 'test-service-role-key'
    STORE_RETRY_DELAY_SECONDS = 0


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
