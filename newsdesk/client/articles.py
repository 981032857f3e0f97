"""
Article list/filter view.

Holds the current page, the filter set and the page of articles returned by
the server. Changing any filter goes back to page 1.

Two behaviours are deliberate and worth knowing about:
- toggle_featured re-sends the whole article with only isFeatured flipped,
  so a concurrent edit of another field by someone else is overwritten.
- responses are applied in arrival order; a slow request can overwrite the
  result of a newer one.
"""
import logging
from dataclasses import dataclass, fields
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional, Union

from .api import AdminContext, ApiError
from .search import SearchInput

logger = logging.getLogger(__name__)

PAGE_SIZE = 10

DateLike = Union[str, date, datetime, None]


@dataclass
class ArticleFilters:
    category: str = ''
    search: str = ''
    is_featured: bool = False
    start_date: DateLike = None
    end_date: DateLike = None


def normalize_date(value: DateLike) -> Optional[str]:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix.

    Plain dates and naive datetimes are read as UTC.
    """
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        text = value.strip()
        if text.endswith(('Z', 'z')):
            text = text[:-1] + '+00:00'
        parsed = datetime.fromisoformat(text)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    parsed = parsed.astimezone(timezone.utc)
    return parsed.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def build_query(page: int, filters: ArticleFilters, limit: int = PAGE_SIZE) -> Dict[str, str]:
    """Query parameters for GET /api/articles. Empty filters are left out."""
    params = {'page': str(page), 'limit': str(limit)}
    if filters.category:
        params['category'] = filters.category
    if filters.search:
        params['searchQuery'] = filters.search
    if filters.is_featured:
        params['isFeatured'] = 'true'
    start = normalize_date(filters.start_date)
    if start:
        params['startDate'] = start
    end = normalize_date(filters.end_date)
    if end:
        params['endDate'] = end
    return params


class ArticleListView:
    FILTER_NAMES = tuple(f.name for f in fields(ArticleFilters))

    def __init__(self, ctx: AdminContext, page_size: int = PAGE_SIZE):
        self.ctx = ctx
        self.page_size = page_size
        self.page = 1
        self.total_pages = 1
        self.filters = ArticleFilters()
        self.articles: List[Dict[str, Any]] = []
        self.categories: List[Dict[str, str]] = []
        self.loading = False
        self.search_input = SearchInput(self.search)

    def mount(self):
        self.fetch_categories()
        self.fetch_articles()

    def fetch_articles(self):
        self.loading = True
        try:
            data = self.ctx.api.get('/api/articles', params=build_query(self.page, self.filters, self.page_size))
            self.articles = data['articles']
            self.total_pages = data['pagination']['pages']
        except (ApiError, ValueError) as e:
            logger.error(f"Error fetching articles: {e}")
        finally:
            self.loading = False

    def fetch_categories(self):
        try:
            self.categories = self.ctx.api.get('/api/categories')['categories']
        except ApiError as e:
            logger.error(f"Error fetching categories: {e}")

    def category_options(self) -> List[str]:
        """Filter dropdown entries; '' stands for all categories."""
        return [''] + [c['name'] for c in self.categories]

    def set_filter(self, name: str, value: Any):
        if name not in self.FILTER_NAMES:
            raise KeyError(f"Unknown filter: {name}")
        setattr(self.filters, name, value)
        self.page = 1
        self.fetch_articles()

    def search(self, text: str):
        self.set_filter('search', text)

    def set_page(self, page: int):
        self.page = page
        self.fetch_articles()

    def toggle_featured(self, article_id: str) -> Optional[Dict[str, Any]]:
        """Flip isFeatured by re-sending the full current record."""
        try:
            current = self.ctx.api.get(f'/api/articles/{article_id}')
            updated = dict(current, isFeatured=not current.get('isFeatured', False))
            self.ctx.api.put(f'/api/articles/{article_id}', json=updated)
        except ApiError as e:
            logger.error(f"Error updating article: {e}")
            return None

        self.articles = [updated if a.get('id') == article_id else a for a in self.articles]
        return updated

    def delete(self, article_id: str):
        try:
            self.ctx.api.delete(f'/api/articles/{article_id}')
        except ApiError as e:
            logger.error(f"Error deleting article: {e}")
            return
        self.fetch_articles()
