"""Structured logging setup"""
import logging

import structlog

from facility_reports.config import settings


def configure_logging() -> None:
    """Configure structlog once at startup."""
    level = logging.DEBUG if settings.debug else logging.INFO
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
