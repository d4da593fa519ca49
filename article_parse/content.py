"""HTML parsing and article content extraction."""

from __future__ import annotations

import logging
from typing import Optional

from bs4 import BeautifulSoup
from readability import Document
from readability.readability import Unparseable

from .config import DEFAULT_PARSER_FEATURES
from .models import ExtractedContent

logger = logging.getLogger("article_parse")


class SoupParser:
    """Parse HTML strings into BeautifulSoup trees.

    A new tree is returned on every call so callers never share state.
    """

    def __init__(self, features: str = DEFAULT_PARSER_FEATURES) -> None:
        self.features = features

    def parse(self, html: str) -> BeautifulSoup:
        return BeautifulSoup(html or "", self.features)


def inner_html(soup: BeautifulSoup) -> str:
    """Serialize the children of ``<body>``.

    Without a ``<body>`` the whole fragment is serialized, minus ``<head>``
    and any stray ``<title>``.
    """
    if soup.body is not None:
        return soup.body.decode_contents()
    for tag in soup(["head", "title"]):
        if not tag.decomposed:
            tag.decompose()
    return soup.decode_contents()


class ReadabilityContentExtractor:
    """Find the main article markup using readability-lxml."""

    def extract(self, soup: BeautifulSoup) -> Optional[ExtractedContent]:
        document = Document(str(soup))
        try:
            summary_html = document.summary(html_partial=True)
        except Unparseable as exc:
            logger.warning("Readability could not parse the document: %s", exc)
            return None
        if not summary_html or not summary_html.strip():
            return None

        title = document.short_title()
        if not title and soup.title and soup.title.string:
            title = soup.title.string.strip()
        return ExtractedContent(content=summary_html, title=title or None)
