from flask import Blueprint, render_template, jsonify, abort
from ..articles.database import get_article_db, increment_views_db
from ..articles.content import html_to_text
from ..articles.media import is_video, embed_url
from ...core.logging_service import logger

news_public_bp = Blueprint('news', __name__, url_prefix='/news', template_folder='templates')


@news_public_bp.app_template_filter('is_video')
def is_video_filter(url):
    return is_video(url)


@news_public_bp.app_template_filter('embed_url')
def embed_url_filter(url):
    return embed_url(url)


def _read_article(article_id):
    """Fetch an article and count the read"""
    views = increment_views_db(article_id)
    if views is None:
        return None
    return get_article_db(article_id)


@news_public_bp.route('/<article_id>')
def article_page(article_id):
    """Public article page"""
    article = _read_article(article_id)
    if not article:
        abort(404)
    return render_template('news_public/article.html',
                           article=article,
                           summary=html_to_text(article['content'], max_length=200) or article['excerpt'])


@news_public_bp.route('/api/articles/<article_id>', methods=['GET'])
def get_article(article_id):
    """Public article JSON"""
    try:
        article = _read_article(article_id)
        if article:
            return jsonify(article)
        return jsonify({'error': 'Article not found'}), 404
    except Exception as e:
        print(f"Error reading article: {e}")
        logger.log_error_with_traceback('news_public', e)
        return jsonify({'error': 'Internal Server Error'}), 500
