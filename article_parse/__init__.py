"""Readable article extraction with sanitized output and duplicate image detection."""

from .config import ParseConfig
from .images import image_exists_in_html, is_image_in_html
from .models import ArticleResult
from .pipeline import (
    ArticleParser,
    parse_article,
    sanitize_and_parse_article,
    sanitize_article,
)
from .sanitizer import sanitize_html
from .utils import clean_filename, normalize_url
from .version import get_version

__all__ = [
    "ArticleParser",
    "ArticleResult",
    "ParseConfig",
    "clean_filename",
    "get_version",
    "image_exists_in_html",
    "is_image_in_html",
    "normalize_url",
    "parse_article",
    "sanitize_and_parse_article",
    "sanitize_article",
    "sanitize_html",
]
