"""Logging configuration for wiregraph."""

import sys
from typing import Any, Optional

from loguru import logger

from ..config.settings import WiregraphSettings

_handler_id: Optional[int] = None


def _remove_handler() -> None:
    global _handler_id
    if _handler_id is not None:
        try:
            logger.remove(_handler_id)
        except ValueError:
            # removed elsewhere, e.g. by logger.remove()
            pass
        _handler_id = None


def setup_logging(settings: WiregraphSettings, sink: Any = None) -> int:
    """Install the wiregraph log sink, replacing the one installed before.

    Args:
        settings: Level and format to use
        sink: Where records go (defaults to stderr)

    Returns:
        The loguru handler id
    """
    global _handler_id
    _remove_handler()

    logger.enable("wiregraph")
    _handler_id = logger.add(
        sink if sink is not None else sys.stderr,
        format=settings.log_format,
        level=settings.log_level,
        filter="wiregraph",
        backtrace=True,
        diagnose=False,
    )
    return _handler_id


def reset_logging() -> None:
    """Remove the wiregraph sink and silence the library again."""
    _remove_handler()
    logger.disable("wiregraph")
