"""structlog setup for the locale service.

``configure_logging()`` runs once from the lifespan. Development gets the
coloured console renderer, production gets one JSON object per line, and
nothing is emitted at all while pytest is loaded.

Usage:
    from infrastructure.logging import get_module_logger

    logger = get_module_logger()
    logger.info("locale_resolved", source="cookies", language="fr")
"""

import inspect
import logging
import sys
from types import ModuleType
from typing import TYPE_CHECKING, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.typing import Processor

from infrastructure.logging.formatters import (
    add_app_info,
    anonymize_client_ip,
    mask_sensitive_data,
    truncate_large_values,
)

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

APP_NAME = "locale-preferences"
SILENT_LEVEL = logging.CRITICAL + 1


def _is_test_environment() -> bool:
    return "pytest" in sys.modules


def _silence() -> BoundLogger:
    logging.root.setLevel(SILENT_LEVEL)
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", level=SILENT_LEVEL, force=True)
    return structlog.stdlib.get_logger()


def _processor_chain(git_sha: str, json_output: bool) -> list[Processor]:
    callsite = structlog.processors.CallsiteParameter
    chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[callsite.FILENAME, callsite.LINENO, callsite.FUNC_NAME]
        ),
        add_app_info(APP_NAME, git_sha),
        mask_sensitive_data(),
        anonymize_client_ip(),
        truncate_large_values(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if json_output:
        chain.append(structlog.processors.JSONRenderer())
    else:
        chain.append(structlog.dev.ConsoleRenderer())
    return chain


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
    settings: Optional["Settings"] = None,
) -> BoundLogger:
    """Install the structlog processor chain and the stdlib root level.

    Args:
        log_level: Level name overriding ``settings.LOG_LEVEL``.
        is_production: Forces JSON (True) or console (False) rendering
            instead of ``settings.is_production``.
        settings: Settings to read from; the cached application settings
            when omitted.

    Returns:
        A logger built from the new configuration.
    """
    if _is_test_environment():
        return _silence()

    if settings is None:
        from infrastructure.services.providers import get_settings

        settings = get_settings()

    json_output = settings.is_production if is_production is None else is_production
    structlog.configure(
        processors=_processor_chain(settings.GIT_SHA, json_output),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level_name = (log_level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        format="%(message)s", level=getattr(logging, level_name, logging.INFO)
    )
    return structlog.stdlib.get_logger()


def _caller_module(depth: int = 2) -> Optional[ModuleType]:
    frame = inspect.currentframe()
    for _ in range(depth):
        if frame is None:
            return None
        frame = frame.f_back
    return inspect.getmodule(frame) if frame else None


def get_logger(name: Optional[str] = None) -> BoundLogger:
    """Logger with ``logger_name`` bound to ``name`` or the caller's module."""
    if not name:
        module = _caller_module()
        name = module.__name__ if module else "unknown"
    return structlog.stdlib.get_logger().bind(logger_name=name)


def get_module_logger() -> BoundLogger:
    """Logger bound to the calling module.

    ``component`` is the last dotted segment and ``module_path`` the full
    name, so a call from ``packages.preferences.sync`` binds
    ``component="sync"``.
    """
    logger = structlog.stdlib.get_logger()
    module = _caller_module()
    if module is None:
        return logger.bind(component="unknown")
    return logger.bind(
        component=module.__name__.rsplit(".", 1)[-1],
        module_path=module.__name__,
    )
