"""
Logging configuration for the workflow core.
"""

import logging
import sys
from typing import Dict, Optional

import structlog

from fibretrack.config.settings import Settings, settings

# Loggers that are too chatty at the root level unless overridden.
DEFAULT_COMPONENT_LEVELS = {
    "asyncio": "WARNING",
    "fibretrack.infrastructure.repositories": "INFO",
}


def component_log_levels(app_settings: Optional[Settings] = None) -> Dict[str, str]:
    """Merge the default per-logger levels with the configured overrides."""
    app_settings = app_settings or settings
    return {**DEFAULT_COMPONENT_LEVELS, **app_settings.COMPONENT_LOG_LEVELS}


def _service_context(app_settings: Settings):
    def add_service_context(logger, method_name, event_dict):
        event_dict.setdefault("service", app_settings.APP_NAME)
        event_dict.setdefault("environment", app_settings.ENVIRONMENT)
        return event_dict

    return add_service_context


def configure_logging(app_settings: Optional[Settings] = None) -> None:
    """Configure structured logging.

    Every event carries the service name and environment. Levels are set on
    the root logger from ``LOG_LEVEL`` and per component from
    ``COMPONENT_LOG_LEVELS``, so store writes can be traced without turning
    on debug output everywhere.
    """
    app_settings = app_settings or settings

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            _service_context(app_settings),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
            if app_settings.ENVIRONMENT == "production"
            else structlog.dev.ConsoleRenderer(colors=app_settings.ENVIRONMENT == "development"),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_level = getattr(logging, app_settings.LOG_LEVEL)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=root_level)
    logging.getLogger().setLevel(root_level)

    for name, level in component_log_levels(app_settings).items():
        logging.getLogger(name).setLevel(getattr(logging, level))


def get_logger(name: str = None) -> structlog.BoundLogger:
    """Get a structured logger."""
    return structlog.get_logger(name)
