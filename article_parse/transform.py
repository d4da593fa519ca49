"""DOM transformations applied to extracted content before sanitizing."""

from __future__ import annotations

from bs4 import BeautifulSoup

from .config import DEFAULT_LINK_ATTRIBUTE, DEFAULT_LOADING_MODE, ParseConfig


def add_lazy_tags(soup: BeautifulSoup, loading: str = DEFAULT_LOADING_MODE) -> BeautifulSoup:
    """Defer loading of every image that does not declare a mode itself."""
    for img in soup.find_all("img"):
        if not img.has_attr("loading"):
            img["loading"] = loading
    return soup


def transform_anchors(
    soup: BeautifulSoup, attribute: str = DEFAULT_LINK_ATTRIBUTE
) -> BeautifulSoup:
    """Move ``href`` to an inert attribute so links are no longer followed."""
    for anchor in soup.find_all("a", href=True):
        href = anchor["href"]
        del anchor["href"]
        if href:
            anchor[attribute] = href
    return soup


def remove_first_time_tag(soup: BeautifulSoup) -> BeautifulSoup:
    first_time = soup.find("time")
    if first_time is not None:
        first_time.decompose()
    return soup


def transform_document(soup: BeautifulSoup, config: ParseConfig | None = None) -> BeautifulSoup:
    """Run every transformation stage over ``soup`` in place."""
    config = config or ParseConfig()
    soup = add_lazy_tags(soup, config.loading_mode)
    soup = transform_anchors(soup, config.link_attribute)
    return remove_first_time_tag(soup)
