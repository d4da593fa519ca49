"""HTML sanitization backed by bleach."""

from __future__ import annotations

import bleach
from bs4 import BeautifulSoup

ALLOWED_TAGS = frozenset(bleach.sanitizer.ALLOWED_TAGS).union(
    {
        "article",
        "section",
        "header",
        "footer",
        "main",
        "aside",
        "figure",
        "figcaption",
        "picture",
        "source",
        "img",
        "div",
        "span",
        "p",
        "br",
        "hr",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "pre",
        "code",
        "kbd",
        "samp",
        "sub",
        "sup",
        "small",
        "mark",
        "del",
        "ins",
        "s",
        "u",
        "q",
        "cite",
        "dl",
        "dt",
        "dd",
        "table",
        "caption",
        "thead",
        "tbody",
        "tfoot",
        "tr",
        "th",
        "td",
        "time",
        "details",
        "summary",
    }
)

GLOBAL_ATTRS = frozenset({"class", "id", "title", "lang", "dir"})

ALLOWED_ATTRS = {
    "a": {"href", "name", "rel", "target"},
    "abbr": {"title"},
    "img": {"src", "srcset", "sizes", "alt", "width", "height", "loading", "decoding"},
    "source": {"src", "srcset", "sizes", "type", "media"},
    "time": {"datetime"},
    "td": {"colspan", "rowspan", "headers"},
    "th": {"colspan", "rowspan", "headers", "scope"},
    "ol": {"start", "reversed", "type"},
    "blockquote": {"cite"},
    "q": {"cite"},
    "del": {"cite", "datetime"},
    "ins": {"cite", "datetime"},
}

ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto", "tel", "data"})

ACTIVE_CONTENT_TAGS = ("script", "style", "noscript", "template", "iframe", "object")


def _allow_attribute(tag: str, name: str, value: str) -> bool:
    if name in GLOBAL_ATTRS or name.startswith("data-"):
        return True
    return name in ALLOWED_ATTRS.get(tag, ())


def _remove_active_content(html: str) -> str:
    """Drop active elements with their contents; bleach would keep their text."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(list(ACTIVE_CONTENT_TAGS)):
        if not tag.decomposed:
            tag.decompose()
    return soup.decode()


class BleachSanitizer:
    """Remove active content from an HTML fragment.

    Sanitizing already sanitized markup returns it unchanged. A new bleach
    cleaner is built for every call since its parser is not thread-safe.
    """

    def _build_cleaner(self) -> bleach.Cleaner:
        return bleach.Cleaner(
            tags=ALLOWED_TAGS,
            attributes=_allow_attribute,
            protocols=ALLOWED_PROTOCOLS,
            strip=True,
            strip_comments=True,
        )

    def sanitize(self, html: str) -> str:
        if not html:
            return ""
        return self._build_cleaner().clean(_remove_active_content(html))


def sanitize_html(html: str) -> str:
    return BleachSanitizer().sanitize(html)
