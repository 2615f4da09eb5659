"""Loggers for polyglot modules and optional application-level setup.

polyglot is embedded in other applications, so importing it never touches
the structlog or stdlib logging configuration. Module loggers are lazy and
render through whatever the host application configured. Applications
without a setup of their own may call ``configure_logging()`` once at
startup.

Usage:
    from polyglot.logging import get_module_logger

    logger = get_module_logger()
    logger.info("translator_created", locale="en")
"""

import inspect
import logging
from typing import Optional

import structlog
from structlog.stdlib import BoundLogger

from polyglot.configuration import Settings
from polyglot.configuration import settings as default_settings


def configure_logging(
    settings: Optional[Settings] = None,
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog and stdlib logging for an application.

    Args:
        settings: Settings providing LOG_LEVEL and is_production
            (default: the module-level settings singleton).
        log_level: Override for the log level name.
        is_production: Override for JSON (True) vs console (False) output.

    Returns:
        Logger bound to the "polyglot" name.
    """
    settings = settings or default_settings
    prod_mode = is_production if is_production is not None else settings.is_production
    level_name = (log_level or settings.LOG_LEVEL).upper()

    renderer = (
        structlog.processors.JSONRenderer()
        if prod_mode
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level_name, logging.INFO),
    )
    return structlog.stdlib.get_logger("polyglot")


def get_module_logger() -> BoundLogger:
    """Get a lazy logger for the calling module.

    The logger carries ``component`` and ``module_path`` context and picks
    up the structlog configuration in effect when it is first used.

    Example:
        # In polyglot/i18n/factory.py
        logger = get_module_logger()
        # context: {"component": "factory", "module_path": "polyglot.i18n.factory"}
    """
    current_frame = inspect.currentframe()
    caller = current_frame.f_back if current_frame is not None else None
    module = inspect.getmodule(caller) if caller is not None else None
    module_name = module.__name__ if module else "unknown"

    return structlog.stdlib.get_logger(
        module_name,
        component=module_name.rsplit(".", 1)[-1],
        module_path=module_name,
    )
