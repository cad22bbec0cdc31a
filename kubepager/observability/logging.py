"""Structured logging for kubepager.

Library code only ever calls ``get_logger``; ``setup_logging`` belongs to
whatever process embeds kubepager (the bundled runner calls it once at
start-up).

Until something configures structlog, kubepager installs a quiet default:
warnings and above go through the stdlib ``logging`` module (so to stderr
unless the embedder routes them elsewhere) and nothing reaches stdout.
An embedder's own ``structlog.configure`` call replaces it.
"""

from __future__ import annotations

import logging
import sys

import structlog

_RENDERERS = {
    "json": structlog.processors.JSONRenderer,
    "console": structlog.dev.ConsoleRenderer,
}


def _configure_library_default() -> None:
    if structlog.is_configured():
        return
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def setup_logging(level: str = "info", fmt: str = "json") -> None:
    """Route structlog output to stderr as JSON lines or human-readable text."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    renderer = _RENDERERS.get(fmt, structlog.processors.JSONRenderer)()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(component: str, **initial: object) -> structlog.stdlib.BoundLogger:
    """Return a logger bound with *component* and any extra context."""
    return structlog.get_logger(component=component, **initial)  # type: ignore[return-value]


_configure_library_default()
