"""
Article Database Helpers
========================

sqlite3 storage for articles. Records leave this module as dicts shaped like
the JSON the admin panel exchanges (camelCase keys, nested author).
"""

from datetime import datetime, timezone
from ...core.config import get_config_value
from ...core.database import Database
from .content import sanitize_html

REQUIRED_FIELDS = ('title', 'excerpt', 'category')

ARTICLE_COLUMNS = '''
    id, title, content, excerpt, category, featured_image, thumbnail_image,
    is_featured, publish_date, views, author_name, author_email,
    created_at, updated_at
'''

# JSON field -> column for plain text fields
TEXT_FIELDS = {
    'title': 'title',
    'content': 'content',
    'excerpt': 'excerpt',
    'category': 'category',
    'featuredImage': 'featured_image',
    'thumbnailImage': 'thumbnail_image',
}


class ArticleValidationError(ValueError):
    """Raised when an article payload cannot be stored"""


def get_db_config():
    """Get database path"""
    return get_config_value('NEWS_DB', 'news.db')


def init_articles_db():
    """Initialize articles table with migrations"""
    with Database.connect(get_db_config()) as conn:
        cursor = conn.cursor()
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS articles (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                content TEXT NOT NULL DEFAULT '',
                excerpt TEXT NOT NULL DEFAULT '',
                category TEXT NOT NULL DEFAULT '',
                featured_image TEXT NOT NULL DEFAULT '',
                thumbnail_image TEXT NOT NULL DEFAULT '',
                is_featured INTEGER NOT NULL DEFAULT 0,
                publish_date TEXT NOT NULL,
                views INTEGER NOT NULL DEFAULT 0,
                author_name TEXT,
                author_email TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        ''')

        # Columns added after the first release
        Database.add_missing_columns(cursor, 'articles', [
            ('thumbnail_image', "TEXT NOT NULL DEFAULT ''"),
        ])

        cursor.execute('CREATE INDEX IF NOT EXISTS idx_articles_publish_date ON articles(publish_date)')
        cursor.execute('CREATE INDEX IF NOT EXISTS idx_articles_category ON articles(category)')
        conn.commit()


def parse_timestamp(value):
    """Normalise an ISO-8601 date or datetime to a UTC 'YYYY-MM-DDTHH:MM:SS.mmmZ' string.

    Naive values are taken as UTC. Raises ArticleValidationError on bad input.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith(('Z', 'z')):
            text = text[:-1] + '+00:00'
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ArticleValidationError(f"Invalid date: {value}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    parsed = parsed.astimezone(timezone.utc)
    return parsed.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def parse_bool(value):
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        return value.strip().lower() in ('true', '1', 'yes', 'on')
    return False


def _row_to_article(row):
    return {
        'id': row['id'],
        'title': row['title'],
        'content': row['content'],
        'excerpt': row['excerpt'],
        'category': row['category'],
        'featuredImage': row['featured_image'] or '',
        'thumbnailImage': row['thumbnail_image'] or '',
        'isFeatured': bool(row['is_featured']),
        'publishDate': row['publish_date'],
        'views': row['views'],
        'author': {
            'name': row['author_name'] or '',
            'email': row['author_email'] or '',
        },
        'createdAt': row['created_at'],
        'updatedAt': row['updated_at'],
    }


def article_columns_from_payload(data, require_all=True):
    """Translate a JSON payload into column values.

    Only fields present in the payload are returned. `id` and `views` are
    never taken from a payload.
    """
    if not isinstance(data, dict):
        raise ArticleValidationError('Request body must be a JSON object')

    missing = [f for f in REQUIRED_FIELDS
               if (require_all or f in data)
               and (not isinstance(data.get(f), str) or not data.get(f).strip())]
    if missing:
        raise ArticleValidationError(f"Missing required fields: {', '.join(missing)}")

    columns = {}
    for field, column in TEXT_FIELDS.items():
        if field in data:
            value = data[field]
            if value is None:
                value = ''
            if not isinstance(value, str):
                raise ArticleValidationError(f"{field} must be a string")
            columns[column] = value

    if 'content' in columns:
        columns['content'] = sanitize_html(columns['content'])

    if 'isFeatured' in data:
        columns['is_featured'] = 1 if parse_bool(data['isFeatured']) else 0

    if data.get('publishDate'):
        columns['publish_date'] = parse_timestamp(data['publishDate'])

    author = data.get('author')
    if isinstance(author, dict):
        columns['author_name'] = author.get('name') or ''
        columns['author_email'] = author.get('email') or ''

    return columns


def get_article_db(article_id):
    """Get single article by ID"""
    with Database.connect(get_db_config()) as conn:
        cursor = conn.cursor()
        cursor.execute(f'SELECT {ARTICLE_COLUMNS} FROM articles WHERE id = ?', (article_id,))
        row = cursor.fetchone()
        return _row_to_article(row) if row else None


def list_articles_db(page=1, limit=10, category=None, search=None, is_featured=False,
                     start_date=None, end_date=None):
    """Get one page of articles, newest first.

    Returns (articles, total) where total counts every matching row.
    """
    conditions = []
    params = []

    if category:
        conditions.append('category = ?')
        params.append(category)
    if search:
        needle = search.casefold()
        conditions.append(
            "(instr(casefold(title), ?) > 0 OR instr(casefold(excerpt), ?) > 0 "
            "OR instr(casefold(content), ?) > 0)"
        )
        params.extend([needle, needle, needle])
    if is_featured:
        conditions.append('is_featured = 1')
    if start_date:
        conditions.append('publish_date >= ?')
        params.append(parse_timestamp(start_date))
    if end_date:
        conditions.append('publish_date <= ?')
        params.append(parse_timestamp(end_date))

    where = f"WHERE {' AND '.join(conditions)}" if conditions else ''

    with Database.connect(get_db_config()) as conn:
        cursor = conn.cursor()
        cursor.execute(f'SELECT COUNT(*) FROM articles {where}', params)
        total = cursor.fetchone()[0]

        cursor.execute(f'''
            SELECT {ARTICLE_COLUMNS} FROM articles {where}
            ORDER BY publish_date DESC, created_at DESC
            LIMIT ? OFFSET ?
        ''', params + [limit, (page - 1) * limit])
        articles = [_row_to_article(row) for row in cursor.fetchall()]

    return articles, total


def create_article_db(data, author=None):
    """Create new article from a JSON payload, returns the stored record"""
    columns = article_columns_from_payload(data, require_all=True)
    now = Database.now()

    record = {
        'id': Database.new_id(),
        'content': '',
        'featured_image': '',
        'thumbnail_image': '',
        'is_featured': 0,
        'publish_date': now,
        'views': 0,
        'author_name': (author or {}).get('name', ''),
        'author_email': (author or {}).get('email', ''),
        'created_at': now,
        'updated_at': now,
    }
    record.update(columns)

    names = ', '.join(record)
    placeholders = ', '.join('?' for _ in record)
    with Database.connect(get_db_config()) as conn:
        cursor = conn.cursor()
        cursor.execute(f'INSERT INTO articles ({names}) VALUES ({placeholders})', list(record.values()))
        conn.commit()

    return get_article_db(record['id'])


def update_article_db(article_id, data):
    """Overwrite an article with the payload's fields.

    Last writer wins: whatever the payload carries replaces the stored value.
    Returns the updated record, or None when the id does not exist.
    """
    columns = article_columns_from_payload(data, require_all=True)
    columns['updated_at'] = Database.now()

    assignments = ', '.join(f'{name} = ?' for name in columns)
    with Database.connect(get_db_config()) as conn:
        cursor = conn.cursor()
        cursor.execute(f'UPDATE articles SET {assignments} WHERE id = ?',
                       list(columns.values()) + [article_id])
        conn.commit()
        if cursor.rowcount == 0:
            return None

    return get_article_db(article_id)


def delete_article_db(article_id):
    """Delete article, returns True if a row was removed"""
    with Database.connect(get_db_config()) as conn:
        cursor = conn.cursor()
        cursor.execute('DELETE FROM articles WHERE id = ?', (article_id,))
        conn.commit()
        return cursor.rowcount > 0


def increment_views_db(article_id):
    """Count one read of an article, returns the new view count or None"""
    with Database.connect(get_db_config()) as conn:
        cursor = conn.cursor()
        cursor.execute('UPDATE articles SET views = views + 1 WHERE id = ?', (article_id,))
        conn.commit()
        if cursor.rowcount == 0:
            return None
        cursor.execute('SELECT views FROM articles WHERE id = ?', (article_id,))
        return cursor.fetchone()[0]


def count_articles_db():
    with Database.connect(get_db_config()) as conn:
        cursor = conn.cursor()
        cursor.execute('SELECT COUNT(*), COALESCE(SUM(is_featured), 0), COALESCE(SUM(views), 0) FROM articles')
        total, featured, views = cursor.fetchone()
        return {'total': total, 'featured': featured, 'views': views}


def media_in_use_db(url):
    """True when any article still references the media URL"""
    with Database.connect(get_db_config()) as conn:
        cursor = conn.cursor()
        cursor.execute('SELECT 1 FROM articles WHERE featured_image = ? OR thumbnail_image = ? LIMIT 1',
                       (url, url))
        return cursor.fetchone() is not None
