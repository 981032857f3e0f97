"""
Newsdesk - A Flask Admin Panel for News
=======================================

A content-management admin panel with:
- Category management
- Article listing, filtering, editing and featuring
- Media uploads (images and videos)
- A Python client that drives the same REST API

Usage:
    from newsdesk import Newsdesk

    app = Flask(__name__)
    Newsdesk(app)
"""

__version__ = '0.1.0'

from .framework import Newsdesk, create_app

__all__ = ['Newsdesk', 'create_app']
