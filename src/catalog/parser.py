"""Extract the published version from a catalog result page.

The catalog renders search results as an HTML table whose version column
cells carry ``class="version"``. Only the first such cell is read. A page
without one (no results, or changed markup) yields None.
"""
from __future__ import annotations

from html.parser import HTMLParser
from typing import List, Optional

from constants import Constants


class _VersionCellParser(HTMLParser):
    """Collects text of the first <td> whose class attribute equals the marker."""

    def __init__(self, css_class: str):
        super().__init__(convert_charrefs=True)
        self._css_class = css_class
        self._depth = 0
        self._chunks: List[str] = []
        self.found = False
        self.done = False

    def handle_starttag(self, tag, attrs):
        if self.done:
            return
        if self.found:
            if tag == "td":
                self._depth += 1
            return
        if tag == "td" and dict(attrs).get("class") == self._css_class:
            self.found = True
            self._depth = 1

    def handle_endtag(self, tag):
        if not self.found or self.done or tag != "td":
            return
        self._depth -= 1
        if self._depth == 0:
            self.done = True

    def handle_data(self, data):
        if self.found and not self.done:
            self._chunks.append(data)

    @property
    def text(self) -> str:
        return "".join(self._chunks)


def extract_version(html: str, css_class: str = Constants.CATALOG_VERSION_CLASS) -> Optional[str]:
    """Return the text of the first version cell, or None if there is none.

    Whitespace is preserved; callers trim it.
    """
    if not html:
        return None
    parser = _VersionCellParser(css_class)
    parser.feed(html)
    parser.close()
    if not parser.found:
        return None
    return parser.text
