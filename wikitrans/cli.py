"""Command line interface for wikitrans."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import List, Optional

import httpx

from . import __version__
from .config import ConfigError, WikiConfig, as_bool, load_config, load_env_file
from .models import PipelineError
from .pipeline import Translator
from .selector import FzfPicker, Picker
from .wikipedia import WikipediaClient

AUTHOR = "wikitrans contributors"


@dataclass
class Settings:
    terms: List[str]
    language: Optional[str]
    translate: Optional[str]
    wiki: WikiConfig
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wikitrans",
        description="Translate a term by following Wikipedia inter-language links.",
        epilog=f"Written by {AUTHOR}.",
    )
    parser.add_argument("terms", metavar="TERM", nargs="+", help="The term to search and translate")
    parser.add_argument(
        "-l",
        "--language",
        "--search",
        "--lang",
        dest="language",
        default=None,
        help="The search language tag",
    )
    parser.add_argument(
        "-t",
        "--translate",
        "--trans",
        dest="translate",
        default=None,
        help="The translate language tag",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="Path to a configuration file", default=None)
    parser.add_argument(
        "--env-file",
        default=None,
        help="Path to a .env file (defaults to .env in the current directory)",
    )
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds", default=None)
    parser.add_argument("--results", type=int, help="Maximum number of search results", default=None)
    parser.add_argument("--height", help="Height of the selection view (e.g. 50%%)", default=None)
    parser.add_argument("--debug", action="store_true", help="Print Wikipedia request/response debug information")
    return parser


def parse_arguments(argv: Optional[List[str]] = None) -> Settings:
    parser = build_parser()
    args = parser.parse_args(argv)

    load_env_file(args.env_file)

    try:
        config_data = load_config(args.config)
        wiki = (
            WikiConfig.from_env()
            .updated(config_data)
            .updated({"timeout": args.timeout, "search_results": args.results, "height": args.height})
        )
        debug = args.debug or as_bool(config_data.get("debug", False), key="debug")
    except ConfigError as exc:
        parser.error(str(exc))

    language = args.language or config_data.get("search_language")
    translate = args.translate or config_data.get("translate_language")

    return Settings(
        terms=list(args.terms),
        language=str(language) if language else None,
        translate=str(translate) if translate else None,
        wiki=wiki,
        debug=debug,
    )


def run(
    argv: Optional[List[str]] = None,
    *,
    picker: Optional[Picker] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> int:
    settings = parse_arguments(argv)

    with WikipediaClient(settings.wiki, transport=transport, debug=settings.debug) as client:
        translator = Translator(
            client,
            picker or FzfPicker(),
            height=settings.wiki.height,
            debug=settings.debug,
        )
        try:
            result = translator.translate(
                settings.terms,
                language=settings.language,
                target=settings.translate,
            )
        except PipelineError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1

    print(result.title if result.translated else "")
    return 0


def main() -> None:
    sys.exit(run())


__all__ = ["Settings", "build_parser", "main", "parse_arguments", "run"]
