"""
Categories Module
=================

Flat category taxonomy for articles.
Two blueprints: the JSON store under /api/categories and the admin page.
"""

from flask import Blueprint

# REST store
categories_api_bp = Blueprint(
    'categories_api',
    __name__,
    url_prefix='/api/categories'
)

# Admin management page
categories_admin_bp = Blueprint(
    'categories_admin',
    __name__,
    url_prefix='/admin/categories',
    template_folder='templates'
)

from . import routes

__all__ = ['categories_api_bp', 'categories_admin_bp']
