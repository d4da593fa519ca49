"""Command-line entry point for article parsing and sanitizing."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import Any, Iterable, Sequence

from .config import (
    DEFAULT_LINK_ATTRIBUTE,
    DEFAULT_LOADING_MODE,
    DEFAULT_PARSER_FEATURES,
    ParseConfig,
)
from .content import SoupParser
from .images import image_exists_in_html
from .pipeline import sanitize_and_parse_article, sanitize_article
from .version import get_version

logger = logging.getLogger("article_parse.cli")


def _ensure_command_prefix(argv: Sequence[str], commands: Iterable[str]) -> Sequence[str]:
    if not argv:
        return argv
    first = argv[0]
    if first in commands or first.startswith("-"):
        return argv
    return ("parse", *argv)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--parser",
        default=DEFAULT_PARSER_FEATURES,
        help="BeautifulSoup parser backend used for every parse step",
    )
    parser.add_argument(
        "--loading",
        default=DEFAULT_LOADING_MODE,
        help="Value set on images that do not declare a loading attribute",
    )
    parser.add_argument(
        "--link-attribute",
        default=DEFAULT_LINK_ATTRIBUTE,
        help="Attribute that receives the original href of neutralized links",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Pretty-print the JSON result with this indentation",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Extract readable articles from HTML and sanitize them for redisplay.",
    )
    parser.add_argument("--version", action="version", version=get_version())
    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_parser = subparsers.add_parser(
        "parse", help="Extract the article from a full HTML page and sanitize it"
    )
    parse_parser.add_argument("input", help="HTML file to read, or - for stdin")
    parse_parser.add_argument(
        "--image",
        default=None,
        help="Image URL that takes precedence over the one found in the page",
    )
    _add_common_arguments(parse_parser)

    sanitize_parser = subparsers.add_parser(
        "sanitize", help="Sanitize already extracted article HTML"
    )
    sanitize_parser.add_argument("input", help="HTML file to read, or - for stdin")
    sanitize_parser.add_argument("--image", default="", help="Representative image URL")
    _add_common_arguments(sanitize_parser)

    check_parser = subparsers.add_parser(
        "check-image", help="Report whether an image already appears in HTML"
    )
    check_parser.add_argument("image", help="Image URL to look for")
    check_parser.add_argument("input", help="HTML file to read, or - for stdin")
    _add_common_arguments(check_parser)

    subparsers.add_parser("version", help="Print the build version")

    argv = list(sys.argv[1:] if argv is None else argv)
    argv = list(_ensure_command_prefix(argv, subparsers.choices.keys()))
    return parser.parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.error("Cannot read %s: %s", path, exc)
        raise SystemExit(1) from exc


def _write_json(payload: Any, indent: int | None) -> None:
    sys.stdout.write(json.dumps(payload, ensure_ascii=False, indent=indent) + "\n")
    sys.stdout.flush()


def _build_config(args: argparse.Namespace) -> ParseConfig:
    return ParseConfig(
        parser_features=args.parser,
        loading_mode=args.loading,
        link_attribute=args.link_attribute,
    )


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    if args.command == "version":
        sys.stdout.write(get_version() + "\n")
        return

    _configure_logging(args.verbose)
    config = _build_config(args)
    html = _read_input(args.input)

    start = time.perf_counter()
    if args.command == "check-image":
        payload: Any = image_exists_in_html(args.image, html, SoupParser(config.parser_features))
    elif args.command == "sanitize":
        payload = sanitize_article(html, args.image, config).to_dict()
    else:
        payload = sanitize_and_parse_article(html, args.image, config).to_dict()
    logger.debug("%s finished in %.2fs", args.command, time.perf_counter() - start)

    _write_json(payload, args.indent)


if __name__ == "__main__":
    main()
