"""Utility helpers for URL normalization and filename handling."""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import quote, urljoin, urlsplit

from .config import PLACEHOLDER_BASE_URL

RESIZE_SUFFIX_PATTERN = re.compile(r"-\d{3,4}-\d{2,3}")
DEFAULT_PORTS = {"http": 80, "https": 443}
# Left unescaped in paths, matching what browsers leave alone.
PATH_SAFE_CHARS = "/%:@!$&'()*+,;=[]|^"


def _strip_query_and_fragment(url: str) -> str:
    return url.split("?", 1)[0].split("#", 1)[0]


def _clean_path(path: str) -> str:
    if not path.startswith("//"):
        path = urlsplit(urljoin(PLACEHOLDER_BASE_URL + "/", path)).path
    return quote(path or "/", safe=PATH_SAFE_CHARS)


def _origin(scheme: str, hostname: str, port: Optional[int]) -> str:
    if ":" in hostname:
        hostname = f"[{hostname}]"
    origin = f"{scheme}://{hostname}"
    if port is not None and DEFAULT_PORTS.get(scheme) != port:
        origin += f":{port}"
    return origin


def normalize_url(url: str) -> str:
    """Reduce an absolute or relative URL to ``origin + path`` or a bare path.

    Query strings and fragments never take part in the result, dot segments
    are resolved and unsafe path characters percent-encoded. Relative
    references are resolved against a placeholder origin that is then
    discarded, and anything that cannot be resolved is returned stripped.
    """
    try:
        parts = urlsplit(url)
        if parts.scheme and parts.netloc and parts.hostname:
            scheme = parts.scheme.lower()
            return _origin(scheme, parts.hostname, parts.port) + _clean_path(parts.path or "/")
    except ValueError:
        pass

    stripped = _strip_query_and_fragment(url)
    try:
        return _clean_path(urlsplit(urljoin(PLACEHOLDER_BASE_URL, stripped)).path)
    except ValueError:
        return stripped


def clean_filename(name: Optional[str]) -> str:
    """Strip resize suffixes and redundant extensions from a filename."""
    if not name:
        return ""
    name = RESIZE_SUFFIX_PATTERN.sub("", name, count=1)
    parts = name.lower().split(".")
    if len(parts) > 2:
        return ".".join(parts[:-1])
    return name.lower()


def last_path_segment(url: str) -> str:
    """Return the trailing path segment of a URL without query or fragment."""
    return _strip_query_and_fragment(url).rsplit("/", 1)[-1]
