"""
Newsdesk Modules
================

Flask blueprint modules for the admin panel.
"""

__all__ = ['dashboard', 'categories', 'articles', 'uploads', 'news_public']
