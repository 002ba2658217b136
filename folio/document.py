"""
Page document model.

A page is an HTML shell parsed with BeautifulSoup. Controllers look up the
same named mount points a browser page exposes and mutate them in place; the
finished page is serialized with ``render()``.
"""

import logging
from pathlib import Path
from typing import Optional

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
HTML_PARSER = "html.parser"


def parse_fragment(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, HTML_PARSER)


def set_display(element: Tag, value: str) -> None:
    """Replace the ``display`` declaration of an inline style."""
    declarations = [
        decl.strip()
        for decl in element.get("style", "").split(";")
        if decl.strip() and decl.split(":", 1)[0].strip() != "display"
    ]
    declarations.append(f"display: {value}")
    element["style"] = "; ".join(declarations)


class PageDocument:
    def __init__(self, html: str):
        self.soup = BeautifulSoup(html, HTML_PARSER)

    @classmethod
    def from_template(cls, name: str) -> "PageDocument":
        return cls((TEMPLATES_DIR / name).read_text(encoding="utf-8"))

    # --- lookup ---

    def get_element_by_id(self, element_id: str) -> Optional[Tag]:
        return self.soup.find(id=element_id)

    def select_one(self, selector: str) -> Optional[Tag]:
        return self.soup.select_one(selector)

    def select(self, selector: str) -> list[Tag]:
        return self.soup.select(selector)

    def _head(self) -> Tag:
        head = self.soup.head
        if head is None:
            head = self.soup.new_tag("head")
            html = self.soup.html or self.soup
            html.insert(0, head)
        return head

    def _body(self) -> Tag:
        return self.soup.body or self.soup

    # --- mutation ---

    def set_inner_html(self, element: Tag, html: str) -> None:
        element.clear()
        for node in list(parse_fragment(html).contents):
            element.append(node)

    def set_text(self, element: Tag, text: str) -> None:
        element.string = text

    def set_display(self, element: Tag, value: str) -> None:
        set_display(element, value)

    @property
    def title(self) -> str:
        return self.soup.title.get_text() if self.soup.title else ""

    @title.setter
    def title(self, value: str) -> None:
        if self.soup.title is None:
            self._head().append(self.soup.new_tag("title"))
        self.soup.title.string = value

    def get_meta(self, attr: str, key: str) -> Optional[Tag]:
        return self._head().find("meta", attrs={attr: key})

    def upsert_meta(self, attr: str, key: str, content: str) -> Tag:
        """Update the meta slot in place, creating it when missing."""
        meta = self.get_meta(attr, key)
        if meta is None:
            meta = self.soup.new_tag("meta")
            meta[attr] = key
            self._head().append(meta)
        meta["content"] = content
        return meta

    def remove_meta(self, attr: str, key: str) -> bool:
        removed = False
        for meta in self._head().find_all("meta", attrs={attr: key}):
            meta.decompose()
            removed = True
        return removed

    def set_canonical(self, url: str) -> Tag:
        link = self.get_element_by_id("canonical-link") or self._head().find(
            "link", rel="canonical"
        )
        if link is None:
            link = self.soup.new_tag("link", rel="canonical", id="canonical-link")
            self._head().append(link)
        link["href"] = url
        return link

    def append_style(self, style_id: str, css: str) -> Tag:
        style = self.soup.new_tag("style", id=style_id)
        style.string = css
        self._head().append(style)
        return style

    def append_to_body(self, html: str) -> None:
        body = self._body()
        for node in list(parse_fragment(html).contents):
            body.append(node)

    def render(self) -> str:
        return str(self.soup)
