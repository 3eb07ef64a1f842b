"""Structured logging for queue and matcher events."""

from __future__ import annotations

import logging

import structlog


def configure_logging(level: str = "WARNING") -> None:
    """Emit ``job.*`` and ``matcher.*`` events as JSON lines at ``level`` and above."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

    logging.basicConfig(level=log_level, format="%(message)s")

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )
