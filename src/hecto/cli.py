"""Entry point for the hecto CLI."""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Any

from hecto.config import Settings, ThemeSettings, load_settings
from hecto.theme import Theme

logger = logging.getLogger(__name__)

LOG_LEVELS = ["debug", "info", "warning", "error"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hecto", description="hecto: a small terminal text editor")
    parser.add_argument("file", nargs="?", default=None, help="File to open")
    parser.add_argument("--log-file", default=None, help="Write logs to this file (default: no logging)")
    parser.add_argument("--log-level", default=None, choices=LOG_LEVELS, help="Log level (default: warning)")
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    overrides: dict[str, Any] = {}
    if args.log_file:
        overrides["logFile"] = args.log_file
    if args.log_level:
        overrides["logLevel"] = args.log_level
    return load_settings(overrides=overrides)


def configure_logging(settings: Settings) -> None:
    """Log to the configured file; the terminal itself is the editor screen."""
    if not settings.log_file:
        logging.getLogger().addHandler(logging.NullHandler())
        return
    level = getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        filename=settings.log_file,
    )


def build_theme(settings: Settings) -> Theme:
    try:
        return settings.theme.build()
    except ValueError as e:
        logger.warning("Invalid theme colour, using defaults: %s", e)
        return ThemeSettings().build()


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    settings = settings_from_args(args)
    configure_logging(settings)

    from hecto.editor import Editor
    from hecto.terminal import ProcessTerminal

    editor = Editor(ProcessTerminal(), settings=settings, theme=build_theme(settings))
    if args.file:
        editor.load(args.file)
    asyncio.run(editor.run())


if __name__ == "__main__":
    main()
