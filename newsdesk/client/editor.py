"""
Rich-text editor binding.

Content flows one way per call: `commit` is the editor telling the host about
an edit, `reset` is the host replacing the editor's content. `reset` never
calls back into the host, so the two cannot feed each other.
"""
from typing import Callable, Optional

from ..modules.articles.content import sanitize_html

ENABLED_FORMATS = (
    'bold',
    'italic',
    'strike',
    'heading1',
    'heading2',
    'bulletList',
    'orderedList',
    'link',
)


class RichTextEditor:
    def __init__(self, content: str = '', on_commit: Optional[Callable[[str], None]] = None):
        self._html = sanitize_html(content)
        self.on_commit = on_commit

    @property
    def html(self) -> str:
        return self._html

    def commit(self, html: str) -> bool:
        """An edit made in the editor. Notifies the host when the HTML changed."""
        html = sanitize_html(html)
        if html == self._html:
            return False
        self._html = html
        if self.on_commit:
            self.on_commit(html)
        return True

    def reset(self, value: Optional[str]) -> bool:
        """Host-side replacement, skipped when the value already matches."""
        html = sanitize_html(value or '')
        if html == self._html:
            return False
        self._html = html
        return True
