"""
Logging setup for the CLI.

Library modules only create module loggers:
    logger = logging.getLogger(__name__)
The CLI calls configure_logging() once so records render through rich.
"""
import logging

from rich.console import Console
from rich.logging import RichHandler

from mastery_engine.config import config

_CONFIGURED = False


def configure_logging(level: str | None = None, console: Console | None = None) -> None:
    """Attach a RichHandler to the package logger. Safe to call more than once."""
    global _CONFIGURED
    logger = logging.getLogger("mastery_engine")
    logger.setLevel((level or config.LOG_LEVEL).upper())
    if _CONFIGURED:
        return
    handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    _CONFIGURED = True
