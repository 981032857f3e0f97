import os
from dotenv import load_dotenv

load_dotenv(override=True)

class Config:
    """
    Base configuration for Newsdesk.
    Deployments provide secrets and database paths via environment variables.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')
    BRAND_NAME = os.getenv('BRAND_NAME', 'Newsdesk')

    # Get DB_DIR from environment, or use a default if not set
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))

    # Database paths - use environment variables or fallback to DB_DIR
    NEWS_DB = os.getenv('NEWS_DB', os.path.join(DB_DIR, "news.db"))
    USER_DB = os.getenv('USER_DB', os.path.join(DB_DIR, "users.db"))
    LOGS_DB = os.getenv('LOGS_DB', os.path.join(DB_DIR, "logs.db"))

    # Table names
    ARTICLES_TABLE = "articles"
    CATEGORIES_TABLE = "categories"
    ADMIN_TABLE = "admin"

    # Article listing
    PAGE_SIZE = int(os.getenv('PAGE_SIZE', '10'))
    MAX_PAGE_SIZE = int(os.getenv('MAX_PAGE_SIZE', '100'))

    # Seconds the article form waits before returning to the list
    REDIRECT_DELAY = float(os.getenv('REDIRECT_DELAY', '1.5'))

    # Comma separated origins allowed to call /api/*
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

    # Uploads: "local" writes under the app static folder, "cloud" uses DigitalOcean Spaces
    STORAGE_TYPE = os.getenv('STORAGE_TYPE', 'local')
    UPLOAD_SUBFOLDER = os.getenv('UPLOAD_SUBFOLDER', 'uploads')
    SPACES_FOLDER = os.getenv('SPACES_FOLDER', 'newsdesk')
    DO_SPACES_REGION = os.getenv('DO_SPACES_REGION')
    DO_SPACES_NAME = os.getenv('DO_SPACES_NAME')
    DO_SPACES_KEY = os.getenv('DO_SPACES_KEY')
    DO_SPACES_SECRET = os.getenv('DO_SPACES_SECRET')

    # Port for local server
    port = int(os.getenv('PORT', '5000'))


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then env var"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val is not None:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val is not None:
        return val
    return os.getenv(key, default)
