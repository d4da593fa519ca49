"""Configuration objects and constants for the article pipeline."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_PARSER_FEATURES = "html.parser"
DEFAULT_LOADING_MODE = "lazy"
DEFAULT_LINK_ATTRIBUTE = "data-href"
PLACEHOLDER_BASE_URL = "http://dummy.com"
VERSION_ENV_VAR = "ARTICLE_PARSE_VERSION"


@dataclass
class ParseConfig:
    """Settings that control parsing and DOM transformation."""

    parser_features: str = DEFAULT_PARSER_FEATURES
    loading_mode: str = DEFAULT_LOADING_MODE
    link_attribute: str = DEFAULT_LINK_ATTRIBUTE
