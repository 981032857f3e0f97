"""
Uploads Module
==============

Generic media upload endpoint used by the article form for featured
images, videos and video thumbnails.
"""

from flask import Blueprint

uploads_bp = Blueprint(
    'uploads',
    __name__,
    url_prefix='/api/upload'
)

from . import routes

__all__ = ['uploads_bp']
