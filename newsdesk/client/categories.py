"""
Category management view.

Every change goes to the server and is followed by a full refetch; there is
no optimistic update. Failures are logged and otherwise ignored.
"""
import logging
from typing import Dict, List, Optional

from .api import AdminContext, ApiError

logger = logging.getLogger(__name__)


class CategoryManager:
    def __init__(self, ctx: AdminContext):
        self.ctx = ctx
        self.categories: List[Dict[str, str]] = []
        self.new_name = ''
        self.editing_id: Optional[str] = None
        self.edit_buffer = ''

    def load(self):
        try:
            data = self.ctx.api.get('/api/categories')
            self.categories = data['categories']
        except ApiError as e:
            logger.error(f"Error fetching categories: {e}")

    mount = load

    def add(self):
        try:
            self.ctx.api.post('/api/categories', json={'name': self.new_name})
            self.new_name = ''
            self.load()
        except ApiError as e:
            logger.error(f"Error adding category: {e}")

    def start_edit(self, category_id: str, name: str):
        """One row at a time: editing another row drops the previous buffer."""
        self.editing_id = category_id
        self.edit_buffer = name

    def cancel_edit(self):
        self.editing_id = None
        self.edit_buffer = ''

    def save(self, category_id: str):
        try:
            self.ctx.api.put(f'/api/categories/{category_id}', json={'name': self.edit_buffer})
            self.cancel_edit()
            self.load()
        except ApiError as e:
            logger.error(f"Error updating category: {e}")

    def delete(self, category_id: str):
        try:
            self.ctx.api.delete(f'/api/categories/{category_id}')
            self.load()
        except ApiError as e:
            logger.error(f"Error deleting category: {e}")
