"""
Article edit/create form.

`article_id == "new"` opens an empty create form, any other id loads that
article for editing. Required fields mirror the browser's `required`
attribute: an empty one stops submit before any request is made.
"""
import logging
from typing import Any, BinaryIO, Dict, List, Optional

from ..modules.articles.media import is_video
from .api import AdminContext, ApiError
from .editor import RichTextEditor

logger = logging.getLogger(__name__)

NEW_ARTICLE_ID = 'new'
LIST_PATH = '/admin/articles/'
REQUIRED_FIELDS = ('title', 'excerpt', 'category')
UPLOAD_TARGETS = ('featuredImage', 'thumbnailImage')

EMPTY_ARTICLE = {
    'title': '',
    'content': '',
    'excerpt': '',
    'category': '',
    'featuredImage': '',
    'thumbnailImage': '',
    'isFeatured': False,
}


class ArticleForm:
    def __init__(self, ctx: AdminContext, article_id: str):
        self.ctx = ctx
        self.article_id = article_id
        self.is_editing = article_id != NEW_ARTICLE_ID
        self.data: Dict[str, Any] = dict(EMPTY_ARTICLE)
        self.editor = RichTextEditor(on_commit=self._on_editor_commit)
        self.categories: List[Dict[str, str]] = []
        self.loading = False
        self.uploading = False
        self.error = ''
        self.success = ''

    def mount(self):
        self.load_categories()
        if self.is_editing:
            self.load()

    def load_categories(self):
        try:
            self.categories = self.ctx.api.get('/api/categories')['categories']
        except ApiError as e:
            logger.error(f"Error fetching categories: {e}")

    def category_options(self) -> List[str]:
        """Store categories, plus the article's own when it no longer exists there."""
        names = [c['name'] for c in self.categories]
        current = self.data.get('category')
        if current and current not in names:
            names.append(current)
        return names

    def load(self):
        self.loading = True
        try:
            article = self.ctx.api.get(f'/api/articles/{self.article_id}')
            self.data = dict(EMPTY_ARTICLE, **article)
            self.editor.reset(self.data['content'])
        except ApiError as e:
            logger.error(f"Error fetching article {self.article_id}: {e}")
            self.error = 'Failed to fetch article'
        finally:
            self.loading = False

    def _on_editor_commit(self, html: str):
        self.data['content'] = html

    def set_field(self, name: str, value: Any):
        if name == 'content':
            self.editor.commit(value)
        else:
            self.data[name] = value

    @property
    def is_video(self) -> bool:
        return is_video(self.data.get('featuredImage'))

    @property
    def show_thumbnail_field(self) -> bool:
        return self.is_video

    def upload(self, file_obj: BinaryIO, filename: str, target: str = 'featuredImage') -> Optional[str]:
        """Send a file to the upload endpoint and store the returned URL in `target`."""
        if target not in UPLOAD_TARGETS:
            raise ValueError(f"Unknown upload target: {target}")

        self.uploading = True
        try:
            response = self.ctx.api.post('/api/upload', files={'file': (filename, file_obj)})
            self.data[target] = response['url']
            return response['url']
        except ApiError as e:
            logger.error(f"Error uploading {filename}: {e}")
            self.error = 'Failed to upload image'
            return None
        finally:
            self.uploading = False

    def missing_fields(self) -> List[str]:
        return [f for f in REQUIRED_FIELDS if not self.data.get(f)]

    def submit(self) -> bool:
        if self.missing_fields():
            return False

        self.loading = True
        self.error = ''
        self.success = ''
        try:
            if self.is_editing:
                self.ctx.api.put(f'/api/articles/{self.article_id}', json=dict(self.data))
            else:
                self.ctx.api.post('/api/articles', json=dict(self.data))
        except ApiError as e:
            logger.error(f"Error saving article: {e}")
            self.error = 'Failed to save article'
            return False
        finally:
            self.loading = False

        self.success = 'Article saved successfully!'
        if not self.is_editing:
            self.data = dict(EMPTY_ARTICLE)
            self.editor.reset('')

        self.ctx.sleep(self.ctx.redirect_delay)
        self.ctx.navigate(LIST_PATH)
        return True
