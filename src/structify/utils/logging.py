"""structlog setup for command-line use.

Library code only calls ``structlog.get_logger``; applications decide
where records go. The CLI routes them to stderr so stdout stays clean
JSON.
"""
from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(verbose: bool = False, json_logs: bool = False) -> None:
    """Configure structlog to render to stderr.

    Args:
        verbose: Emit INFO and DEBUG events; otherwise WARNING and above.
        json_logs: Render one JSON object per line instead of console text.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
