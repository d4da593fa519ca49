"""Data models and collaborator interfaces used throughout the pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Protocol, Union

from bs4 import BeautifulSoup


@dataclass(frozen=True)
class ArticleResult:
    """Sanitized article markup with its representative image."""

    content: str
    image: str
    is_duplicate_image: bool

    def to_dict(self) -> Dict[str, Union[str, bool]]:
        """Return the wire shape handed to CLI and MCP callers."""
        return {
            "content": self.content,
            "image": self.image,
            "isDuplicateImage": self.is_duplicate_image,
        }


@dataclass
class ExtractedContent:
    """Main article markup found by the content extractor."""

    content: str
    title: Optional[str] = None


@dataclass
class PageMetadata:
    """Metadata describing the parsed page."""

    title: Optional[str] = None
    description: Optional[str] = None
    byline: Optional[str] = None
    image: str = ""


class HtmlParser(Protocol):
    def parse(self, html: str) -> BeautifulSoup:
        ...


class ContentExtractor(Protocol):
    def extract(self, soup: BeautifulSoup) -> Optional[ExtractedContent]:
        ...


class ImageExtractor(Protocol):
    def extract(self, soup: BeautifulSoup) -> Optional[PageMetadata]:
        ...


class Sanitizer(Protocol):
    def sanitize(self, html: str) -> str:
        ...
