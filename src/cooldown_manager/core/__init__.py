"""
Core primitives shared by the execution layer.

Logging, configuration and identifier derivation live here. Nothing in
this package knows about cooldown state.
"""

from .identifiers import error_identifier
from .logging import configure_logging, get_logger
from .settings import CooldownConfig, CooldownSettings

__all__ = [
    "error_identifier",
    "configure_logging",
    "get_logger",
    "CooldownConfig",
    "CooldownSettings",
]
