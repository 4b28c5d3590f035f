"""Cooldown manager: run an action at most once per falloff interval.

Each identifier carries its own falloff factor. Hammering an identifier
while it is cooling down pushes the factor up by one step on its next
allowed run, lengthening the quiet interval exponentially. An allowed run
that follows no suppression pulls the factor back down.

Outcomes:
    ALLOWED: The cooldown had elapsed, state was reset and the action ran
    SUPPRESSED: Too soon; the hit counter went up and the action did not run
    FORCED: ``force=True`` bypassed the cooldown entirely

Concurrency:
    Housekeeping, lookup and check-and-update run under the store's lock.
    The lock is released before the action runs, so a slow action does not
    block other identifiers. The transition is already committed at that
    point: concurrent callers for the same identifier are suppressed, and
    an action that raises does not undo it.

Example:
    >>> from cooldown_manager import CooldownManager
    >>>
    >>> manager = CooldownManager()
    >>>
    >>> try:
    ...     sync_inventory()
    ... except Exception as exc:
    ...     manager.perform_action_with_cooldown(exc, lambda: open_ticket(exc))
    ...     raise
"""

from __future__ import annotations

import functools
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, TypeVar

from cooldown_manager.core.identifiers import error_identifier
from cooldown_manager.core.logging import get_logger
from cooldown_manager.core.settings import CooldownConfig, CooldownSettings
from cooldown_manager.execution.intervals import (
    FalloffInterval,
    clamp_falloff_factor,
    falloff_intervals,
    required_interval_seconds,
)
from cooldown_manager.execution.state import CooldownState, CooldownStore

T = TypeVar("T")

logger = get_logger(__name__)


class CooldownOutcome(str, Enum):
    """Result of a cooldown decision."""

    ALLOWED = "allowed"
    SUPPRESSED = "suppressed"
    FORCED = "forced"


@dataclass
class CooldownStats:
    """Counters for cooldown monitoring."""

    allowed: int = 0
    suppressed: int = 0
    forced: int = 0
    evicted: int = 0

    @property
    def suppression_rate(self) -> float:
        """Suppressed decisions as a percentage of all non-forced decisions."""
        total = self.allowed + self.suppressed
        if total == 0:
            return 0.0
        return (self.suppressed / total) * 100


class CooldownManager:
    """Thread-safe, per-identifier cooldown with exponential falloff.

    Attributes:
        config: Tunables for this instance
        clock: Monotonic seconds source, injectable for tests
    """

    def __init__(
        self,
        config: CooldownConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config or CooldownConfig()
        self.clock = clock
        self._store = CooldownStore()
        self._stats = CooldownStats()
        self._stats_lock = threading.Lock()

    @classmethod
    def from_settings(
        cls,
        settings: CooldownSettings | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> "CooldownManager":
        """Build a manager from ``COOLDOWN_*`` environment settings."""
        settings = settings or CooldownSettings()
        return cls(config=settings.to_config(), clock=clock)

    # ── Inspection ───────────────────────────────────────────────────

    @property
    def stats(self) -> CooldownStats:
        """Snapshot of the decision counters."""
        with self._stats_lock:
            return replace(self._stats)

    @property
    def store(self) -> CooldownStore:
        return self._store

    def get_state(self, identifier: str) -> CooldownState | None:
        """Copy of the tracked state for ``identifier``, or None."""
        return self._store.get(identifier)

    def tracked_identifiers(self) -> list[str]:
        return self._store.identifiers()

    def required_interval(self, identifier: str) -> int:
        """Current required interval for ``identifier`` in seconds.

        Untracked identifiers report the base interval.
        """
        state = self._store.get(identifier)
        factor = state.falloff_factor if state is not None else 1.0
        return required_interval_seconds(self.config, factor)

    # ── Housekeeping ─────────────────────────────────────────────────

    def remove_old_states(self) -> list[str]:
        """Evict identifiers that have been quiet past their retention window.

        Returns:
            Identifiers that were removed
        """
        removed = self._store.evict_stale(self.clock(), self.config)
        self._record_evictions(removed)
        return removed

    def _record_evictions(self, removed: list[str]) -> None:
        if not removed:
            return
        with self._stats_lock:
            self._stats.evicted += len(removed)
        for identifier in removed:
            logger.debug("cooldown.evicted", identifier=identifier)

    def reset(self, identifier: str | None = None) -> None:
        """Forget one identifier, or every identifier when none is given.

        The next call for a forgotten identifier is treated as fresh.
        """
        if identifier is None:
            self._store.clear()
        else:
            self._store.remove(identifier)
        logger.debug("cooldown.reset", identifier=identifier)

    # ── Decision ─────────────────────────────────────────────────────

    def decide(self, identifier: str) -> CooldownOutcome:
        """Check-and-update the cooldown for ``identifier`` without running anything.

        Runs housekeeping first. Returns ALLOWED when the caller may act now;
        in that case the state has already been reset for the next window.
        """
        with self._store.lock:
            now = self.clock()
            removed = self._store.evict_stale(now, self.config)
            state, created = self._store.get_or_create(identifier, now)
            required = required_interval_seconds(self.config, state.falloff_factor)

            if not created and now < state.last_action_time + required:
                state.suppressed_hit_count += 1
                outcome = CooldownOutcome.SUPPRESSED
            else:
                if state.suppressed_hit_count > 0:
                    state.falloff_factor += self.config.falloff_factor_step
                else:
                    state.falloff_factor -= self.config.falloff_factor_step
                state.falloff_factor = clamp_falloff_factor(
                    self.config, state.falloff_factor
                )
                state.last_action_time = now
                state.suppressed_hit_count = 0
                outcome = CooldownOutcome.ALLOWED

            hits = state.suppressed_hit_count
            factor = state.falloff_factor

        self._record_evictions(removed)
        with self._stats_lock:
            if outcome is CooldownOutcome.ALLOWED:
                self._stats.allowed += 1
            else:
                self._stats.suppressed += 1

        log = logger.bind(identifier=identifier)
        if outcome is CooldownOutcome.SUPPRESSED:
            log.debug(
                "cooldown.suppressed",
                hits=hits,
                falloff_factor=factor,
                required_seconds=required,
            )
        else:
            log.debug(
                "cooldown.allowed",
                falloff_factor=factor,
                required_seconds=required_interval_seconds(self.config, factor),
            )
        return outcome

    def perform_action_with_cooldown(
        self,
        identifier: str | BaseException,
        action: Callable[[], Any],
        force: bool = False,
    ) -> CooldownOutcome:
        """Run ``action`` unless ``identifier`` is cooling down.

        Args:
            identifier: Cooldown key, or an exception whose cause chain is
                converted to one
            action: Zero-argument callable run synchronously when allowed
            force: Run unconditionally, without reading or touching state

        Returns:
            The decision that was taken

        Raises:
            Whatever ``action`` raises, unmodified
        """
        if isinstance(identifier, BaseException):
            identifier = error_identifier(identifier)
            logger.debug("cooldown.error_identifier", identifier=identifier)

        if force:
            with self._stats_lock:
                self._stats.forced += 1
            logger.bind(identifier=identifier).debug("cooldown.forced")
            action()
            return CooldownOutcome.FORCED

        outcome = self.decide(identifier)
        if outcome is CooldownOutcome.ALLOWED:
            action()
        return outcome

    # ── Diagnostics ──────────────────────────────────────────────────

    def log_all_intervals(self) -> list[FalloffInterval]:
        """Log the required interval at every falloff step up to the max."""
        rows = falloff_intervals(self.config)
        logger.info(
            "cooldown.intervals",
            min_action_interval_seconds=self.config.min_action_interval_seconds,
            max_falloff_factor=self.config.max_falloff_factor,
            falloff_factor_step=self.config.falloff_factor_step,
        )
        for row in rows:
            logger.info(
                "cooldown.interval",
                falloff_factor=row.falloff_factor,
                seconds=row.seconds,
                interval=str(row),
            )
        return rows


def with_cooldown(
    manager: CooldownManager,
    identifier: str | None = None,
) -> Callable[[Callable[..., T]], Callable[..., T | None]]:
    """Decorator factory that routes every call through a cooldown manager.

    Args:
        manager: Manager holding the cooldown state
        identifier: Cooldown key (default: the function's qualified name)

    Returns:
        Decorator; the wrapped function returns the original result when
        allowed and None when suppressed

    Example:
        >>> @with_cooldown(manager, "nightly-report")
        ... def send_report():
        ...     return mailer.send(build_report())
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T | None]:
        key = identifier
        if key is None:
            key = f"{func.__module__}.{func.__qualname__}"

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T | None:
            result: list[T] = []
            manager.perform_action_with_cooldown(
                key, lambda: result.append(func(*args, **kwargs))
            )
            return result[0] if result else None

        return wrapper

    return decorator


__all__ = [
    "CooldownOutcome",
    "CooldownStats",
    "CooldownManager",
    "with_cooldown",
]
