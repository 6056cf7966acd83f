"""
structlog setup for embeddings of the bridge.

The primitives log through structlog.get_logger() with dotted event names
(protect.captured, rescue.recovered, rescue.relayed, ensure.cleanup_failed);
this module decides how those events are filtered and rendered.
"""

from __future__ import annotations

import logging

import structlog


def configure_structlog(log_level: str = "INFO", log_format: str = "console") -> None:
    """
    Configure structlog for structured logging.

    log_format="json" renders JSON lines (machine-readable);
    anything else renders colored, human-readable console output.
    Unknown level names fall back to INFO.
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
