"""Logging setup shared by the library and the CLI."""

from __future__ import annotations

import logging
import os

from rich.logging import RichHandler

_CONFIGURED = False


def configure_logging(level: str | None = None) -> None:
    """Attach a rich handler to the ``strikeguard`` logger once.

    The level defaults to ``STRIKEGUARD_LOG_LEVEL`` or INFO.
    """
    global _CONFIGURED
    level = (level or os.getenv("STRIKEGUARD_LOG_LEVEL", "INFO")).upper()
    logger = logging.getLogger("strikeguard")
    logger.setLevel(level)
    if _CONFIGURED:
        return
    handler = RichHandler(show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    _CONFIGURED = True


def snippet(text: str, limit: int = 60) -> str:
    """Shorten content for log lines."""
    text = text.replace("\n", " ")
    return text if len(text) <= limit else text[:limit] + "..."
