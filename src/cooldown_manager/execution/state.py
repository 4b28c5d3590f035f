"""Per-identifier cooldown state and the lock-guarded store that holds it.

ARCHITECTURE
────────────
::

    CooldownStore
      ├── _states: dict[str, CooldownState]
      └── lock: threading.RLock   ─ guards every read, write and scan

    CooldownState
      ├── last_action_time      ─ clock reading of the last allowed run
      ├── suppressed_hit_count  ─ suppressions since that run
      └── falloff_factor        ─ exponent in [1, max_falloff_factor]

The decision engine holds ``store.lock`` across its whole check-and-update,
so two callers racing on one identifier can never both be allowed. The lock
is reentrant so the engine can call the store's own locked methods while
holding it.

Entries are created lazily and dropped by ``evict_stale`` once their
identifier has been quiet for twice its current required interval. The
retention window is recomputed from the factor at scan time.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, replace

from cooldown_manager.core.settings import CooldownConfig
from cooldown_manager.execution.intervals import retention_seconds


@dataclass
class CooldownState:
    """Mutable cooldown bookkeeping for one identifier."""

    last_action_time: float
    suppressed_hit_count: int = 0
    falloff_factor: float = 1.0


class CooldownStore:
    """Thread-safe mapping of identifier to ``CooldownState``."""

    def __init__(self):
        self._states: dict[str, CooldownState] = {}
        self.lock = threading.RLock()

    def get_or_create(self, identifier: str, now: float) -> tuple[CooldownState, bool]:
        """Return the state for ``identifier``, creating it if missing.

        Returns:
            ``(state, created)`` where ``created`` is True when the state was
            inserted by this call.
        """
        with self.lock:
            state = self._states.get(identifier)
            if state is not None:
                return state, False
            state = CooldownState(last_action_time=now)
            self._states[identifier] = state
            return state, True

    def evict_stale(self, now: float, config: CooldownConfig) -> list[str]:
        """Drop every entry quiet for longer than its retention window.

        Returns:
            Identifiers that were removed
        """
        with self.lock:
            removed = [
                identifier
                for identifier, state in self._states.items()
                if state.last_action_time
                < now - retention_seconds(config, state.falloff_factor)
            ]
            for identifier in removed:
                del self._states[identifier]
            return removed

    def get(self, identifier: str) -> CooldownState | None:
        """Return a snapshot copy of the state for ``identifier``, if tracked."""
        with self.lock:
            state = self._states.get(identifier)
            return replace(state) if state is not None else None

    def remove(self, identifier: str) -> None:
        """Forget ``identifier``."""
        with self.lock:
            self._states.pop(identifier, None)

    def clear(self) -> None:
        """Forget every identifier."""
        with self.lock:
            self._states.clear()

    def identifiers(self) -> list[str]:
        """List tracked identifiers."""
        with self.lock:
            return list(self._states.keys())

    def __len__(self) -> int:
        with self.lock:
            return len(self._states)


__all__ = ["CooldownState", "CooldownStore"]
