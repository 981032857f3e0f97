"""
Newsdesk Flask extension.

    app = Flask(__name__)
    Newsdesk(app)

registers every admin module, prepares the databases and enables CORS for the
REST API. Modules can be switched off through the `features` config.
"""

import os
import secrets
from flask import Flask, jsonify
from flask_cors import CORS

from .core.config import Config
from .core.database import Database
from .core.logging_service import logger

DEFAULT_FEATURES = {
    'dashboard': True,
    'categories': True,
    'articles': True,
    'uploads': True,
    'news_public': True,
}

# Settings copied from Config when the app does not define them
CONFIG_DEFAULTS = (
    'BRAND_NAME', 'PAGE_SIZE', 'MAX_PAGE_SIZE', 'REDIRECT_DELAY', 'CORS_ORIGINS',
    'STORAGE_TYPE', 'UPLOAD_SUBFOLDER', 'SPACES_FOLDER', 'DO_SPACES_REGION',
    'DO_SPACES_NAME', 'DO_SPACES_KEY', 'DO_SPACES_SECRET',
)

DATABASE_FILES = {
    'NEWS_DB': 'news.db',
    'USER_DB': 'users.db',
    'LOGS_DB': 'logs.db',
}


class Newsdesk:
    def __init__(self, app=None, config=None):
        self._config = config or {}
        self._registered = []
        if app is not None:
            self.init_app(app)

    @property
    def features(self):
        features = dict(DEFAULT_FEATURES)
        features.update(self._config.get('features', {}))
        return features

    def init_app(self, app):
        self._apply_config(app)
        self._setup_database_dir(app)

        with app.app_context():
            self._init_databases()

        self._setup_cors(app)
        self._register_blueprints(app)
        self._register_context_processor(app)
        self._register_health(app)

        app.extensions['newsdesk'] = self
        print(f"[NEWSDESK] Registered modules: {', '.join(self._registered)}")

    def get_registered_modules(self):
        return list(self._registered)

    def _apply_config(self, app):
        for key in CONFIG_DEFAULTS:
            app.config.setdefault(key, getattr(Config, key))

        if self._config.get('brand_name'):
            app.config['BRAND_NAME'] = self._config['brand_name']

        db_dir = app.config.setdefault('DB_DIR', Config.DB_DIR)
        for key, filename in DATABASE_FILES.items():
            if not app.config.get(key):
                app.config[key] = os.getenv(key) or os.path.join(db_dir, filename)

        if not app.config.get('SECRET_KEY'):
            app.config['SECRET_KEY'] = Config.SECRET_KEY
        if not app.config.get('SECRET_KEY'):
            print("[NEWSDESK] FLASK_SECRET_KEY is not set, sessions will not survive a restart")
            app.config['SECRET_KEY'] = secrets.token_hex(32)

    def _setup_database_dir(self, app):
        os.makedirs(app.config['DB_DIR'], exist_ok=True)

    def _init_databases(self):
        features = self.features
        if features['dashboard']:
            from .modules.dashboard.routes import init_admin_table
            init_admin_table()
        if features['categories']:
            from .modules.categories.routes import init_categories_db
            init_categories_db()
        if features['articles'] or features['news_public']:
            from .modules.articles.database import init_articles_db
            init_articles_db()

    def _setup_cors(self, app):
        origins = app.config.get('CORS_ORIGINS') or '*'
        if origins == '*':
            CORS(app, resources={r"/api/*": {"origins": "*"}}, send_wildcard=True)
        else:
            CORS(app,
                 resources={r"/api/*": {"origins": [o.strip() for o in origins.split(',') if o.strip()]}},
                 supports_credentials=True)

    def _register_blueprints(self, app):
        features = self.features

        if features['dashboard']:
            from .modules.dashboard import dashboard_bp
            app.register_blueprint(dashboard_bp)
            self._registered.append('dashboard')

        if features['categories']:
            from .modules.categories import categories_api_bp, categories_admin_bp
            app.register_blueprint(categories_api_bp)
            app.register_blueprint(categories_admin_bp)
            self._registered.append('categories')

        if features['articles']:
            from .modules.articles import articles_api_bp, articles_admin_bp
            app.register_blueprint(articles_api_bp)
            app.register_blueprint(articles_admin_bp)
            self._registered.append('articles')

        if features['uploads']:
            from .modules.uploads import uploads_bp
            app.register_blueprint(uploads_bp)
            self._registered.append('uploads')

        if features['news_public']:
            from .modules.news_public import news_public_bp
            app.register_blueprint(news_public_bp)
            self._registered.append('news_public')

    def _register_context_processor(self, app):
        newsdesk = self

        @app.context_processor
        def inject_newsdesk():
            return {
                'brand_name': app.config.get('BRAND_NAME') or 'Newsdesk',
                'newsdesk_config': {
                    'features': newsdesk.features,
                    'modules': newsdesk.get_registered_modules(),
                },
            }

    def _register_health(self, app):
        @app.route('/health')
        def health():
            checks = {
                key.lower(): Database.is_reachable(app.config[key])
                for key in DATABASE_FILES
            }
            ok = all(checks.values())
            if not ok:
                logger.critical('health', 'Database check failed', details=checks)
            return jsonify({'status': 'ok' if ok else 'critical', 'checks': checks}), 200 if ok else 503


def create_app(config=None, **flask_kwargs):
    """Application factory.

    Args:
        config: dict merged into app.config; a 'features' key toggles modules.
        flask_kwargs: passed to Flask(), e.g. static_folder.
    """
    config = dict(config or {})
    features = config.pop('features', None)

    app = Flask(__name__, **flask_kwargs)
    app.config['SESSION_COOKIE_HTTPONLY'] = True
    app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'
    app.config.update(config)

    Newsdesk(app, {'features': features} if features else None)
    return app
