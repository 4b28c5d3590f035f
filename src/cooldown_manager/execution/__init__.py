"""Cooldown execution: state store, interval math and the decision engine.

MODULE MAP
──────────
  1. intervals.py  ─ required/retention interval math, falloff table
  2. state.py      ─ CooldownState, CooldownStore (lock-guarded dict)
  3. cooldown.py   ─ CooldownManager, CooldownOutcome, with_cooldown
"""

from .cooldown import CooldownManager, CooldownOutcome, CooldownStats, with_cooldown
from .intervals import (
    FalloffInterval,
    falloff_intervals,
    required_interval_seconds,
    retention_seconds,
)
from .state import CooldownState, CooldownStore

__all__ = [
    "CooldownManager",
    "CooldownOutcome",
    "CooldownStats",
    "with_cooldown",
    "FalloffInterval",
    "falloff_intervals",
    "required_interval_seconds",
    "retention_seconds",
    "CooldownState",
    "CooldownStore",
]
