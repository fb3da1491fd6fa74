"""Configuration management using environment variables.

This module provides centralized configuration management using python-decouple
to read from .env files and environment variables.
"""

from decouple import config


class Config:
    """Base configuration class."""

    # Database
    DATABASE_URL: str = config('DATABASE_URL', default='sqlite:///profiles.db')
    DB_TIMEOUT_SECONDS: float = config('DB_TIMEOUT_SECONDS', default=5.0, cast=float)

    # Application
    SECRET_KEY: str = config('SECRET_KEY', default='dev-secret-key-change-in-production')

    # Environment
    DEBUG: bool = config('DEBUG', default=False, cast=bool)
    ENVIRONMENT: str = config('ENVIRONMENT', default='development')

    # Logging
    LOG_LEVEL: str = config('LOG_LEVEL', default='INFO')
    LOG_FILE: str = config('LOG_FILE', default='')

    # Event notifications (optional)
    EVENT_WEBHOOK_URL: str = config('EVENT_WEBHOOK_URL', default='')
    EVENT_WEBHOOK_TIMEOUT: float = config('EVENT_WEBHOOK_TIMEOUT', default=2.0, cast=float)


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    LOG_LEVEL = 'WARNING'


class TestingConfig(Config):
    """Testing configuration."""
    DATABASE_URL = 'sqlite:///test_profiles.db'
    DEBUG = False


def get_config() -> Config:
    """Get configuration based on environment."""
    env = config('ENVIRONMENT', default='development')

    if env == 'production':
        return ProductionConfig()
    elif env == 'testing':
        return TestingConfig()
    else:
        return DevelopmentConfig()
