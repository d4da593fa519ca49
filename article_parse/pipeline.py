"""High-level orchestration for extracting and sanitizing articles."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from .config import ParseConfig
from .content import ReadabilityContentExtractor, SoupParser, inner_html
from .images import MetadataImageExtractor, image_exists_in_html
from .models import (
    ArticleResult,
    ContentExtractor,
    HtmlParser,
    ImageExtractor,
    Sanitizer,
)
from .sanitizer import BleachSanitizer
from .transform import transform_document

logger = logging.getLogger("article_parse")


class ArticleParser:
    """Extract, transform and sanitize article markup.

    Collaborators default to the bundled implementations and can be swapped
    for any object with the same method.
    """

    def __init__(
        self,
        config: Optional[ParseConfig] = None,
        parser: Optional[HtmlParser] = None,
        content_extractor: Optional[ContentExtractor] = None,
        image_extractor: Optional[ImageExtractor] = None,
        sanitizer: Optional[Sanitizer] = None,
    ) -> None:
        self.config = config or ParseConfig()
        self.parser = parser or SoupParser(self.config.parser_features)
        self.content_extractor = content_extractor or ReadabilityContentExtractor()
        self.image_extractor = image_extractor or MetadataImageExtractor()
        self.sanitizer = sanitizer or BleachSanitizer()

    def parse(self, html: str, default_image: Optional[str] = None) -> Tuple[str, str]:
        """Return the article markup and the image to show with it.

        A caller-supplied ``default_image`` takes precedence over the image
        found in the page metadata.
        """
        soup = self.parser.parse(html)

        content = ""
        try:
            extracted = self.content_extractor.extract(soup)
        except Exception:  # pylint: disable=broad-except
            logger.warning("Content extraction failed", exc_info=True)
            extracted = None
        if extracted is not None:
            content = extracted.content or ""
            logger.debug("Extracted article %r (%d chars)", extracted.title, len(content))

        extracted_image = ""
        try:
            metadata = self.image_extractor.extract(soup)
        except Exception:  # pylint: disable=broad-except
            logger.warning("Metadata extraction failed", exc_info=True)
            metadata = None
        if metadata is not None:
            extracted_image = metadata.image or ""
            logger.debug(
                "Page metadata: title=%r byline=%r description=%r image=%r",
                metadata.title,
                metadata.byline,
                metadata.description,
                extracted_image,
            )

        return content, default_image or extracted_image

    def sanitize(self, html: str, image: Optional[str]) -> ArticleResult:
        """Transform and sanitize ``html`` and check it for ``image``."""
        soup = transform_document(self.parser.parse(html), self.config)
        sanitized = self.sanitizer.sanitize(inner_html(soup))
        is_duplicate = image_exists_in_html(image, sanitized, self.parser)
        if is_duplicate:
            logger.debug("Image %s already appears in the article body", image)
        return ArticleResult(
            content=sanitized,
            image=image or "",
            is_duplicate_image=is_duplicate,
        )

    def run(self, html: Optional[str], default_image: Optional[str] = None) -> ArticleResult:
        if not html:
            return ArticleResult(content="", image=default_image or "", is_duplicate_image=False)
        content, image = self.parse(html, default_image)
        return self.sanitize(content, image)


def parse_article(
    html: str,
    default_image: Optional[str] = None,
    config: Optional[ParseConfig] = None,
) -> Tuple[str, str]:
    return ArticleParser(config).parse(html, default_image)


def sanitize_article(
    html: str,
    image: Optional[str],
    config: Optional[ParseConfig] = None,
) -> ArticleResult:
    """Sanitize already extracted article markup without re-extracting it."""
    return ArticleParser(config).sanitize(html, image)


def sanitize_and_parse_article(
    html: Optional[str],
    default_image: Optional[str] = None,
    config: Optional[ParseConfig] = None,
) -> ArticleResult:
    """Extract the article from raw HTML, then sanitize it."""
    return ArticleParser(config).run(html, default_image)
