"""
Articles Module
===============

Admin interface and REST store for news articles.

Provides:
- Paginated, filtered article listing
- Article creation and full-record editing
- Featured flag and media (image or video) handling
- Rich-text content restricted to a fixed tag allow-list
"""

from flask import Blueprint

articles_api_bp = Blueprint(
    'articles_api',
    __name__,
    url_prefix='/api/articles'
)

articles_admin_bp = Blueprint(
    'articles_admin',
    __name__,
    url_prefix='/admin/articles',
    template_folder='templates'
)

from . import routes

__all__ = ['articles_api_bp', 'articles_admin_bp']
