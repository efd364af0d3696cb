"""Centralized logging configuration for the content bridge."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Final, cast

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["configure_logging", "console", "get_logger"]

_LOG_LEVEL_ENV: Final[str] = "CONTENT_BRIDGE_LOG_LEVEL"
_DEFAULT_LEVEL_NAME: Final[str] = "INFO"
LOGGER_LABEL: Final[str] = "content-source"

console = Console(stderr=True)

if TYPE_CHECKING:

    class _ManagedRichHandler(RichHandler):
        _content_bridge_managed: bool

else:
    _ManagedRichHandler = RichHandler


def _resolve_level() -> int:
    """Return the logging level defined via environment variable."""
    level_name = os.getenv(_LOG_LEVEL_ENV, _DEFAULT_LEVEL_NAME).upper()
    return getattr(logging, level_name, logging.INFO)


def configure_logging() -> None:
    """Configure logging once with a Rich handler."""
    root_logger = logging.getLogger()
    level = _resolve_level()

    managed_handler: _ManagedRichHandler | None = None
    for handler in root_logger.handlers:
        if isinstance(handler, RichHandler) and getattr(handler, "_content_bridge_managed", False):
            managed_handler = cast(_ManagedRichHandler, handler)
            break

    if managed_handler is None:
        handler = _ManagedRichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler._content_bridge_managed = True
        root_logger.addHandler(handler)

    root_logger.setLevel(level)
    logging.captureWarnings(True)


def get_logger(parent: logging.Logger | None, default_name: str) -> logging.Logger:
    """Return a labelled child of a host-supplied logger, or the module logger."""
    if parent is None:
        return logging.getLogger(default_name)
    return parent.getChild(LOGGER_LABEL)
