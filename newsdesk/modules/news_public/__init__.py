"""
Public News Module
==================

Read-only article pages. Each read counts towards the article's views.
"""

from .routes import news_public_bp

__all__ = ['news_public_bp']
