"""Cooldown configuration: the explicit per-manager config and its env loader.

Two layers:

- ``CooldownConfig`` is the plain, frozen value handed to a
  ``CooldownManager`` at construction. It is never global and never
  validated; its preconditions are documented on the class.
- ``CooldownSettings`` reads the same tunables from ``COOLDOWN_*``
  environment variables (or a ``.env`` file) through pydantic-settings,
  checks them at load time and converts with ``to_config()``.

Examples:
    >>> from cooldown_manager.core.settings import CooldownConfig, CooldownSettings
    >>> CooldownConfig(min_action_interval_seconds=2).max_falloff_factor
    5.0
    >>> # COOLDOWN_FALLOFF_FACTOR_STEP=1 in the environment
    >>> config = CooldownSettings().to_config()

Tags:
    settings, configuration, pydantic, environment, cooldown
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MIN_ACTION_INTERVAL_SECONDS = 5
DEFAULT_MAX_FALLOFF_FACTOR = 5.0
DEFAULT_FALLOFF_FACTOR_STEP = 0.5


@dataclass(frozen=True)
class CooldownConfig:
    """Tunables for one manager instance.

    Attributes:
        min_action_interval_seconds: Base interval; an action never runs twice
            within this many seconds. Must be >= 1.
        max_falloff_factor: Ceiling on the exponent applied to the base
            interval. Must be >= 1.
        falloff_factor_step: Amount the exponent moves on each allowed run.
            Must be >= 0; 0 disables falloff.
    """

    min_action_interval_seconds: int = DEFAULT_MIN_ACTION_INTERVAL_SECONDS
    max_falloff_factor: float = DEFAULT_MAX_FALLOFF_FACTOR
    falloff_factor_step: float = DEFAULT_FALLOFF_FACTOR_STEP


class CooldownSettings(BaseSettings):
    """Cooldown tunables sourced from the environment.

    Fields
    ──────
    min_action_interval_seconds : COOLDOWN_MIN_ACTION_INTERVAL_SECONDS
    max_falloff_factor          : COOLDOWN_MAX_FALLOFF_FACTOR
    falloff_factor_step         : COOLDOWN_FALLOFF_FACTOR_STEP
    log_level                   : COOLDOWN_LOG_LEVEL
    service                     : COOLDOWN_SERVICE
    """

    model_config = SettingsConfigDict(
        env_prefix="COOLDOWN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Falloff ──────────────────────────────────────────────────
    min_action_interval_seconds: int = Field(
        default=DEFAULT_MIN_ACTION_INTERVAL_SECONDS,
        ge=1,
        description="Base interval in seconds",
    )
    max_falloff_factor: float = Field(
        default=DEFAULT_MAX_FALLOFF_FACTOR,
        ge=1.0,
        description="Ceiling on the falloff exponent",
    )
    falloff_factor_step: float = Field(
        default=DEFAULT_FALLOFF_FACTOR_STEP,
        ge=0.0,
        description="Exponent increment/decrement per allowed run",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    service: str = "cooldown"

    def to_config(self) -> CooldownConfig:
        """Convert to the plain config a manager is built with."""
        return CooldownConfig(
            min_action_interval_seconds=self.min_action_interval_seconds,
            max_falloff_factor=self.max_falloff_factor,
            falloff_factor_step=self.falloff_factor_step,
        )


__all__ = [
    "DEFAULT_MIN_ACTION_INTERVAL_SECONDS",
    "DEFAULT_MAX_FALLOFF_FACTOR",
    "DEFAULT_FALLOFF_FACTOR_STEP",
    "CooldownConfig",
    "CooldownSettings",
]
