import logging
from flask import Flask
from flask_cors import CORS


def create_app(config_name='default'):
    """Application factory pattern"""
    app = Flask(__name__)

    # Load environment variables before the config classes are read
    from dotenv import load_dotenv
    load_dotenv()

    # Load configuration
    from config import config, get_database_uri
    app.config.from_object(config[config_name])
    if not app.config.get('SQLALCHEMY_DATABASE_URI'):
        app.config['SQLALCHEMY_DATABASE_URI'] = get_database_uri()

    # Configure logging
    if not app.testing:
        logging.basicConfig(
            level=getattr(logging, app.config['LOG_LEVEL']),
            format='%(asctime)s %(levelname)s %(name)s: %(message)s'
        )

    # Fail fast on a broken production configuration
    from church_inventory.utils.config_validator import validate_config
    validate_config(app)

    # Initialize correlation ID middleware
    from church_inventory.api.middlewares.correlation_id import (
        CorrelationIdMiddleware, init_correlation_id_logging
    )
    CorrelationIdMiddleware(app)
    init_correlation_id_logging(app)

    # Initialize database
    from church_inventory.database import init_db
    init_db(app)

    # CORS for the dashboard
    CORS(app, origins=app.config.get('CORS_ORIGINS', ['*']))

    # Register blueprints
    from church_inventory.api.controllers import inventory_bp, auth_bp, reports_bp, health_bp
    app.register_blueprint(auth_bp)
    app.register_blueprint(reports_bp)
    app.register_blueprint(health_bp)
    app.register_blueprint(inventory_bp, url_prefix='/api/v1')
    app.logger.info("Blueprints registered successfully")

    # Register error handlers
    from church_inventory.utils.error_handlers import register_error_handlers
    register_error_handlers(app)

    return app


def init_database(app):
    """Create database tables - call this explicitly when ready"""
    from church_inventory.database import db
    with app.app_context():
        try:
            from sqlalchemy import text
            db.session.execute(text('SELECT 1'))  # Test connection
            db.create_all()
            app.logger.info("Database tables created successfully")
            return True
        except Exception as e:
            app.logger.error(f"Failed to create database tables: {e}")
            if not app.debug:
                # In production, fail fast
                raise
            app.logger.warning("Continuing without database connection in development mode")
            return False
