"""
Newsdesk Client
===============

Python side of the admin panel: a requests-based API client and the admin
views (category manager, article list, article form) as plain objects.

Usage:
    from newsdesk.client import ApiClient, AdminContext, CategoryManager

    api = ApiClient("http://localhost:5000")
    api.login("admin@example.com", "secret")
    manager = CategoryManager(AdminContext(api))
    manager.load()
"""

from .api import ApiClient, ApiError, AdminContext
from .articles import ArticleFilters, ArticleListView, build_query, normalize_date
from .categories import CategoryManager
from .editor import RichTextEditor, ENABLED_FORMATS
from .form import ArticleForm, NEW_ARTICLE_ID
from .search import SearchInput

__all__ = [
    'ApiClient', 'ApiError', 'AdminContext',
    'ArticleFilters', 'ArticleListView', 'build_query', 'normalize_date',
    'CategoryManager',
    'RichTextEditor', 'ENABLED_FORMATS',
    'ArticleForm', 'NEW_ARTICLE_ID',
    'SearchInput',
]
