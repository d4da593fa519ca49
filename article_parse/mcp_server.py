"""MCP server exposing article-parse tools."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Union

from mcp.server.fastmcp import FastMCP

from .images import image_exists_in_html
from .pipeline import sanitize_and_parse_article as _sanitize_and_parse_article
from .pipeline import sanitize_article as _sanitize_article
from .version import get_version

logger = logging.getLogger("article_parse.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="article-parse")


@mcp.tool()
async def sanitize_and_parse_article(
    html: str,
    default_image: Optional[str] = None,
) -> Dict[str, Union[str, bool]]:
    """Extract the readable article from raw HTML and return sanitized markup."""
    return _sanitize_and_parse_article(html, default_image).to_dict()


@mcp.tool()
async def sanitize_article(
    html: str,
    image: str = "",
) -> Dict[str, Union[str, bool]]:
    """Sanitize already extracted article HTML and flag a duplicate image."""
    return _sanitize_article(html, image).to_dict()


@mcp.tool()
async def is_image_in_html(image_url: str, html: str) -> bool:
    """Report whether an image already appears in the given HTML."""
    return image_exists_in_html(image_url, html)


@mcp.tool()
async def version() -> str:
    """Return the article-parse build version."""
    return get_version()


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
