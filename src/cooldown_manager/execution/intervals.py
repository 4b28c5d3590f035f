"""Falloff interval math.

The required quiet interval for an identifier is a power of the base
interval, with the falloff factor as exponent:

    required = floor(min_action_interval_seconds ** falloff_factor)

With the default config (5s base, max factor 5, step 0.5) the table is:

    #1:   0h 0m 5s
    #1.5: 0h 0m 11s
    #2:   0h 0m 25s
    #2.5: 0h 0m 55s
    #3:   0h 2m 5s
    #3.5: 0h 4m 39s
    #4:   0h 10m 25s
    #4.5: 0h 23m 17s
    #5:   0h 52m 5s
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from cooldown_manager.core.settings import CooldownConfig


def required_interval_seconds(config: CooldownConfig, falloff_factor: float) -> int:
    """Seconds that must pass after an allowed run before the next one."""
    return math.floor(config.min_action_interval_seconds ** falloff_factor)


def retention_seconds(config: CooldownConfig, falloff_factor: float) -> int:
    """Seconds of quiet after which an identifier's state is dropped."""
    return math.ceil(config.min_action_interval_seconds ** falloff_factor) * 2


def clamp_falloff_factor(config: CooldownConfig, falloff_factor: float) -> float:
    """Clamp a factor into ``[1, max_falloff_factor]``."""
    return min(max(falloff_factor, 1.0), config.max_falloff_factor)


@dataclass(frozen=True)
class FalloffInterval:
    """One row of the falloff table."""

    falloff_factor: float
    seconds: int

    @property
    def hours(self) -> int:
        return self.seconds // 3600

    @property
    def minutes(self) -> int:
        return self.seconds % 3600 // 60

    @property
    def remainder_seconds(self) -> int:
        return self.seconds % 60

    def __str__(self) -> str:
        return (
            f"#{self.falloff_factor:g}: "
            f"{self.hours}h {self.minutes}m {self.remainder_seconds}s"
        )


def falloff_intervals(config: CooldownConfig) -> list[FalloffInterval]:
    """Enumerate required intervals from factor 1 up to the configured max.

    The max is included even when fractional steps land a hair past it in
    floating point. A step of 0 yields exactly one row.
    """
    rows: list[FalloffInterval] = []
    step = config.falloff_factor_step
    ceiling = config.max_falloff_factor
    index = 0
    while True:
        factor = 1.0 + index * step
        if math.isclose(factor, ceiling):
            factor = ceiling
        elif factor > ceiling:
            break
        rows.append(
            FalloffInterval(
                falloff_factor=factor,
                seconds=required_interval_seconds(config, factor),
            )
        )
        if step == 0:
            break
        index += 1
    return rows


__all__ = [
    "required_interval_seconds",
    "retention_seconds",
    "clamp_falloff_factor",
    "FalloffInterval",
    "falloff_intervals",
]
