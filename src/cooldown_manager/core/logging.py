"""
Structured logging for cooldown decisions.

Every decision the manager takes is a structlog event carrying the
identifier it concerns, so a host can see why an action ran or was held
back:

    cooldown.allowed     identifier, falloff_factor, required_seconds
    cooldown.suppressed  identifier, hits, falloff_factor, required_seconds
    cooldown.forced      identifier
    cooldown.evicted     identifier
    cooldown.reset       identifier (None for all)
    cooldown.interval    falloff_factor, seconds, interval

Decision events are DEBUG; the interval table is INFO. Without a call to
``configure_logging`` structlog's defaults apply and everything prints.

Examples:
    >>> from cooldown_manager.core.logging import configure_logging
    >>> from cooldown_manager.core.settings import CooldownSettings
    >>> configure_logging(CooldownSettings(log_level="DEBUG"), json_format=True)
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from cooldown_manager.core.settings import CooldownSettings


class _ServiceTag:
    """Processor stamping the configured service name on each event."""

    def __init__(self, service: str):
        self.service = service

    def __call__(
        self, logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict.setdefault("service", self.service)
        return event_dict


def build_processors(service: str, json_format: bool) -> list[Processor]:
    """Processor chain for cooldown logs, ending in the renderer."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        _ServiceTag(service),
    ]
    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    return processors


def configure_logging(
    settings: CooldownSettings | None = None,
    json_format: bool | None = None,
) -> None:
    """Configure structlog from cooldown settings.

    Args:
        settings: Source of ``log_level`` and ``service`` (default: read
            ``COOLDOWN_*`` from the environment)
        json_format: True for JSON, False for console, None for auto (JSON if not tty)
    """
    settings = settings or CooldownSettings()
    if json_format is None:
        json_format = not sys.stdout.isatty()

    level = getattr(logging, settings.log_level.upper())
    structlog.configure(
        processors=build_processors(settings.service, json_format),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (usually ``get_logger(__name__)``)."""
    return structlog.get_logger(name)


__all__ = ["build_processors", "configure_logging", "get_logger"]
