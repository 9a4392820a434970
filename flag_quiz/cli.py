"""
Flag Quiz command line
======================

Validates the flag directory layout and serves the quiz over HTTP.

Usage:
    flag-quiz serve --dir ./country-flags --port 8000
    flag-quiz check --dir ./country-flags
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from PIL import Image, UnidentifiedImageError

from . import __version__, config
from .logging_config import setup_logger
from .quiz import list_codes, load_catalog
from .quiz.assets import flag_path
from .quiz.catalog import read_country_file
from .quiz.errors import QuizError

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def valid_flag_dir(value: str) -> Path:
    """Accept a checkout of the country-flags repository."""
    path = Path(value)
    countries_path = path / config.COUNTRIES_JSON
    png_dir = path / config.PNG_DIR
    if not (path.is_dir() and countries_path.is_file() and png_dir.is_dir()):
        raise argparse.ArgumentTypeError(f"{value} is not valid")
    try:
        read_country_file(countries_path)
    except QuizError as exc:
        raise argparse.ArgumentTypeError(f"{countries_path} is not valid") from exc
    return path


def valid_template_dir(value: str) -> Path:
    path = Path(value)
    if not (path.is_dir() and (path / config.QUIZ_TEMPLATE).is_file()):
        raise argparse.ArgumentTypeError(f"{value} is not valid")
    return path


def valid_port(value: str) -> int:
    try:
        port = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid port value: {value}") from exc
    if port <= 0:
        raise argparse.ArgumentTypeError("value should be positive")
    if port >= config.MAX_PORT:
        raise argparse.ArgumentTypeError(f"value should be less than {config.MAX_PORT}")
    return port


def find_broken_flags(flag_dir: Path) -> List[str]:
    """Codes of the catalog whose flag image is missing or does not decode."""
    catalog = load_catalog(flag_dir)
    broken: List[str] = []
    for code in list_codes(catalog):
        path = flag_path(code, catalog.asset_dir)
        if not path.is_file():
            logger.warning("%s: missing %s", code, path)
            broken.append(code)
            continue
        try:
            with Image.open(path) as image:
                image.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as exc:
            logger.warning("%s: unreadable image %s (%s)", code, path, exc)
            broken.append(code)
    return broken


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from .app import create_app

    settings = config.Settings(
        flag_dir=args.dir,
        template_dir=args.templates,
        option_count=args.options,
    )
    try:
        app = create_app(settings)
    except (QuizError, ValueError) as exc:
        logger.error("Cannot start: %s", exc)
        return 2

    logger.info(
        "Using flag dir: %s, countries: %d", settings.flag_dir, len(app.state.catalog)
    )
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    try:
        broken = find_broken_flags(args.dir)
    except QuizError as exc:
        logger.error("Cannot load catalog: %s", exc)
        return 2

    if broken:
        print(f"{len(broken)} flag(s) need attention: {', '.join(broken)}")
        return 1
    print("All flags present.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flag-quiz", description="Guess the country from its flag."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level", default="INFO", choices=LOG_LEVELS, help="Logging verbosity"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Serve the quiz over HTTP")
    serve_parser.add_argument(
        "-d", "--dir", type=valid_flag_dir, required=True, help="Flag dir path"
    )
    serve_parser.add_argument(
        "-t",
        "--templates",
        type=valid_template_dir,
        default=config.DEFAULT_TEMPLATE_DIR,
        help="Directory holding quiz.html",
    )
    serve_parser.add_argument("--host", default=config.DEFAULT_HOST)
    serve_parser.add_argument("-p", "--port", type=valid_port, default=config.DEFAULT_PORT)
    serve_parser.add_argument(
        "-n",
        "--options",
        type=int,
        default=config.DEFAULT_OPTION_COUNT,
        help="Number of options per question",
    )
    serve_parser.set_defaults(func=cmd_serve)

    check_parser = subparsers.add_parser(
        "check", help="Report countries whose flag image is missing or unreadable"
    )
    check_parser.add_argument(
        "-d", "--dir", type=valid_flag_dir, required=True, help="Flag dir path"
    )
    check_parser.set_defaults(func=cmd_check)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logger(level=args.log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
