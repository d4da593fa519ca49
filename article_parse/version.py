"""Build version lookup."""

from __future__ import annotations

import os
from importlib import metadata

from .config import VERSION_ENV_VAR

DISTRIBUTION_NAME = "article-parse"
UNKNOWN_VERSION = "0+unknown"


def get_version() -> str:
    """Return the version stamped at build time, if any, else the installed one."""
    override = os.getenv(VERSION_ENV_VAR)
    if override:
        return override
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return UNKNOWN_VERSION
