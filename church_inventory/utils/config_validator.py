"""
Configuration Validator
Checks the loaded Flask config at startup and fails fast in production
"""

import logging
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


def is_valid_url(url: str) -> bool:
    """Validates a URL format"""
    try:
        result = urlparse(url)
        return all([result.scheme, result.netloc])
    except Exception:
        return False


def is_valid_log_level(level: str) -> bool:
    """Validates log level"""
    valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
    return str(level).upper() in valid_levels


# Configuration validation rules
VALIDATION_RULES = {
    'SUPABASE_URL': {
        'required': True,
        'validator': is_valid_url,
        'error_message': 'SUPABASE_URL must be a valid URL',
    },
    'SUPABASE_SERVICE_ROLE_KEY': {
        'required': True,
        'validator': lambda v: bool(v),
        'error_message': 'SUPABASE_SERVICE_ROLE_KEY must be a non-empty string',
    },
    'SQLALCHEMY_DATABASE_URI': {
        'required': True,
        'validator': lambda v: bool(v) and '://' in v,
        'error_message': 'DATABASE_URL must be a SQLAlchemy database URI',
    },
    'LOG_LEVEL': {
        'required': False,
        'validator': is_valid_log_level,
        'error_message': 'LOG_LEVEL must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL',
    },
    'PHOTO_BUCKET': {
        'required': False,
        'validator': lambda v: bool(v),
        'error_message': 'PHOTO_BUCKET must be a non-empty string',
    },
}


def collect_config_errors(config) -> list:
    """Return a list of human readable problems with ``config``"""
    errors = []
    for key, rule in VALIDATION_RULES.items():
        value = config.get(key)
        if value in (None, ''):
            if rule['required']:
                errors.append(f"{key} is required")
            continue
        if not rule['validator'](value):
            errors.append(rule['error_message'])
    return errors


def validate_config(app):
    """
    Validate the app configuration

    Production refuses to start with a broken configuration; other
    environments only log the problems.
    """
    errors = collect_config_errors(app.config)
    if not errors:
        return True

    for error in errors:
        logger.warning(f"Configuration problem: {error}")

    if not app.debug and not app.testing:
        raise RuntimeError(f"Invalid configuration: {'; '.join(errors)}")
    return False
