"""cooldown_manager

Thread-safe cooldown tracking with exponential falloff.

Core ideas
1. Every action is keyed by an identifier (or an exception chain)
2. An identifier may act at most once per required interval
3. Hammering an identifier during its cooldown lengthens the next interval
"""

from cooldown_manager.core.identifiers import error_identifier
from cooldown_manager.core.settings import CooldownConfig, CooldownSettings
from cooldown_manager.execution.cooldown import (
    CooldownManager,
    CooldownOutcome,
    CooldownStats,
    with_cooldown,
)
from cooldown_manager.execution.intervals import FalloffInterval, falloff_intervals
from cooldown_manager.execution.state import CooldownState, CooldownStore

__version__ = "0.1.0"

__all__ = [
    "CooldownConfig",
    "CooldownSettings",
    "CooldownManager",
    "CooldownOutcome",
    "CooldownStats",
    "CooldownState",
    "CooldownStore",
    "FalloffInterval",
    "error_identifier",
    "falloff_intervals",
    "with_cooldown",
]
