"""
Dashboard Module
================

Admin authentication and the landing dashboard.

Provides:
- Admin login/logout
- First admin creation
- Dashboard with article and category counts

This is the foundation module that the other admin pages plug into.
"""

from flask import Blueprint

# Note: Blueprint name is 'admin' so guards can redirect to 'admin.login'
dashboard_bp = Blueprint(
    'admin',
    __name__,
    url_prefix='/admin',
    template_folder='templates'
)

# Import routes after blueprint is created
from . import routes

__all__ = ['dashboard_bp']
