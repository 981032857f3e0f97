"""
Article Routes
==============

REST store for articles plus the admin list and edit pages.
"""

import math
from urllib.parse import urlparse
from flask import render_template, request, jsonify, abort
from . import articles_api_bp, articles_admin_bp, media
from .database import (
    ArticleValidationError, get_article_db, list_articles_db, create_article_db,
    update_article_db, delete_article_db, media_in_use_db, parse_bool,
)
from ...core.auth import admin_required, admin_api_required, current_admin
from ...core.config import get_config_value
from ...core.logging_service import logger
from ...core.storage import delete_file

NEW_ARTICLE_ID = 'new'
MEDIA_FIELDS = ('featuredImage', 'thumbnailImage')


def _int_arg(name, default):
    value = request.args.get(name)
    if value in (None, ''):
        return default
    try:
        return int(value)
    except ValueError:
        raise ArticleValidationError(f"{name} must be an integer")


def _pagination_args():
    page_size = int(get_config_value('PAGE_SIZE', 10))
    max_page_size = int(get_config_value('MAX_PAGE_SIZE', 100))
    page = max(1, _int_arg('page', 1))
    limit = min(max(1, _int_arg('limit', page_size)), max_page_size)
    return page, limit


def _default_author():
    admin = current_admin()
    if not admin or not admin.get('email'):
        return None
    email = admin['email']
    return {'name': email.split('@')[0], 'email': email}


def _is_uploaded(url):
    subfolder = get_config_value('UPLOAD_SUBFOLDER', 'uploads')
    return f"/{subfolder}/" in urlparse(url).path


def _remove_unused_media(urls):
    """Delete uploaded files no article references any more"""
    for url in urls:
        if not url or not _is_uploaded(url) or media_in_use_db(url):
            continue
        try:
            delete_file(url)
        except Exception as e:
            print(f"Error deleting media {url}: {e}")
            logger.warning('articles', f"Could not delete media {url}", details={'error': str(e)})


# ===== API Routes =====

@articles_api_bp.route('', methods=['GET'])
@admin_api_required
def list_articles():
    """Get one page of articles matching the filters"""
    try:
        page, limit = _pagination_args()
        articles, total = list_articles_db(
            page=page,
            limit=limit,
            category=request.args.get('category') or None,
            search=request.args.get('searchQuery') or None,
            is_featured=parse_bool(request.args.get('isFeatured', '')),
            start_date=request.args.get('startDate') or None,
            end_date=request.args.get('endDate') or None,
        )
        return jsonify({
            'articles': articles,
            'pagination': {
                'total': total,
                'page': page,
                'limit': limit,
                'pages': math.ceil(total / limit),
            }
        })
    except ArticleValidationError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        print(f"Error getting articles: {e}")
        logger.log_error_with_traceback('articles', e)
        return jsonify({'error': 'Internal Server Error'}), 500


@articles_api_bp.route('/<article_id>', methods=['GET'])
@admin_api_required
def get_article(article_id):
    """Get single article"""
    try:
        article = get_article_db(article_id)
        if article:
            return jsonify(article)
        return jsonify({'error': 'Article not found'}), 404
    except Exception as e:
        print(f"Error getting article: {e}")
        logger.log_error_with_traceback('articles', e)
        return jsonify({'error': 'Internal Server Error'}), 500


@articles_api_bp.route('', methods=['POST'])
@admin_api_required
def create_article():
    """Create new article"""
    try:
        article = create_article_db(request.get_json(silent=True), author=_default_author())
        logger.log_user_action('articles', f"Created article {article['title']}",
                               details={'id': article['id']})
        return jsonify({'article': article}), 201
    except ArticleValidationError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        print(f"Error creating article: {e}")
        logger.log_error_with_traceback('articles', e)
        return jsonify({'error': 'Internal Server Error'}), 500


@articles_api_bp.route('/<article_id>', methods=['PUT'])
@admin_api_required
def update_article(article_id):
    """Overwrite article with the submitted record"""
    try:
        previous = get_article_db(article_id)
        article = update_article_db(article_id, request.get_json(silent=True))
        if article:
            if previous:
                _remove_unused_media(previous[field] for field in MEDIA_FIELDS
                                     if previous[field] != article[field])
            return jsonify({'article': article})
        return jsonify({'error': 'Article not found'}), 404
    except ArticleValidationError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        print(f"Error updating article: {e}")
        logger.log_error_with_traceback('articles', e)
        return jsonify({'error': 'Internal Server Error'}), 500


@articles_api_bp.route('/<article_id>', methods=['DELETE'])
@admin_api_required
def delete_article(article_id):
    """Delete article"""
    try:
        article = get_article_db(article_id)
        if article and delete_article_db(article_id):
            _remove_unused_media(article[field] for field in MEDIA_FIELDS)
            logger.log_user_action('articles', f"Deleted article {article_id}")
            return jsonify({'message': 'Article deleted'})
        return jsonify({'error': 'Article not found'}), 404
    except Exception as e:
        print(f"Error deleting article: {e}")
        logger.log_error_with_traceback('articles', e)
        return jsonify({'error': 'Internal Server Error'}), 500


# ===== Admin Pages =====

@articles_admin_bp.route('/')
@admin_required
def articles_page():
    """Article list with filters and pagination"""
    return render_template('articles/articles.html',
                           page_size=int(get_config_value('PAGE_SIZE', 10)))


@articles_admin_bp.route('/<article_id>')
@admin_required
def article_form_page(article_id):
    """Create form for the 'new' id, edit form otherwise"""
    is_editing = article_id != NEW_ARTICLE_ID
    if is_editing and not get_article_db(article_id):
        abort(404)
    return render_template('articles/article_form.html',
                           article_id=article_id,
                           is_editing=is_editing,
                           redirect_delay=float(get_config_value('REDIRECT_DELAY', 1.5)),
                           video_extensions=media.VIDEO_EXTENSIONS,
                           video_markers=media.VIDEO_MARKERS,
                           youtube_pattern=media.YOUTUBE_ID.pattern,
                           vimeo_pattern=media.VIMEO_ID.pattern)
