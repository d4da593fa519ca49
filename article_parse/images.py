"""Representative image lookup and duplicate detection."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from bs4 import BeautifulSoup

from .content import SoupParser
from .models import HtmlParser, PageMetadata
from .utils import clean_filename, last_path_segment, normalize_url

logger = logging.getLogger("article_parse")

# Checked in order; the first non-empty value wins.
IMAGE_META_KEYS: Tuple[Tuple[str, str], ...] = (
    ("property", "og:image"),
    ("property", "og:image:secure_url"),
    ("property", "og:image:url"),
    ("name", "twitter:image"),
    ("name", "twitter:image:src"),
    ("property", "twitter:image"),
    ("itemprop", "image"),
)


def _meta_content(soup: BeautifulSoup, attr: str, value: str) -> Optional[str]:
    tag = soup.find("meta", attrs={attr: value})
    if tag and tag.get("content"):
        return tag["content"].strip() or None
    return None


def find_page_image(soup: BeautifulSoup) -> str:
    """Return the image a page advertises for itself, or an empty string."""
    for attr, value in IMAGE_META_KEYS:
        content = _meta_content(soup, attr, value)
        if content:
            return content
    link = soup.find("link", rel="image_src")
    if link and link.get("href"):
        return link["href"].strip()
    return ""


class MetadataImageExtractor:
    """Read title, description, byline and image from document metadata."""

    def extract(self, soup: BeautifulSoup) -> Optional[PageMetadata]:
        title = _meta_content(soup, "property", "og:title")
        if not title and soup.title and soup.title.string:
            title = soup.title.string.strip()

        description = _meta_content(soup, "name", "description") or _meta_content(
            soup, "property", "og:description"
        )
        byline = _meta_content(soup, "name", "author")

        return PageMetadata(
            title=title or None,
            description=description,
            byline=byline,
            image=find_page_image(soup),
        )


def image_exists_in_html(
    image_url: Optional[str],
    html: Optional[str],
    parser: Optional[HtmlParser] = None,
) -> bool:
    """Check whether any ``<img>`` in ``html`` refers to ``image_url``.

    Two images are the same when their normalized locations are equal or one
    ends with the other, or when their canonical filenames match.
    """
    if not image_url or not html:
        return False

    target_normalized = normalize_url(image_url)
    target_filename = clean_filename(last_path_segment(image_url))

    soup = (parser or SoupParser()).parse(html)
    for img in soup.find_all("img", src=True):
        src = img.get("src")
        if not src:
            continue

        src_normalized = normalize_url(src)
        src_filename = clean_filename(last_path_segment(src))

        if (
            src_normalized == target_normalized
            or target_normalized.endswith(src_normalized)
            or src_normalized.endswith(target_normalized)
            or (src_filename and src_filename == target_filename)
        ):
            logger.debug("Image %s already present as %s", image_url, src)
            return True
    return False


is_image_in_html = image_exists_in_html
