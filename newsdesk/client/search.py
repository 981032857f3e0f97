from typing import Callable


class SearchInput:
    """Collects a text query and hands it to a callback on submit."""

    def __init__(self, on_search: Callable[[str], None]):
        self.text = ''
        self.on_search = on_search

    def set_text(self, text: str):
        self.text = text

    def submit(self):
        self.on_search(self.text)
