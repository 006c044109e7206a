"""LocationStore - bounded, sparse per-coordinate gathering history."""
from __future__ import annotations

import dataclasses
import heapq
import logging
from typing import Any, Iterator

from tick_harvest.config import HarvestConfig
from tick_harvest.types import CleanupStats, Coord, LocationState, StoreMetrics

logger = logging.getLogger(__name__)

_ACTIVE_DEPLETION = 0.1
_RECENT_MS = 300_000
_BYTES_PER_ENTRY = 100


class LocationStore:
    """Maps coordinates to LocationState records.

    Sparse storage: only coordinates that have been gathered from are
    stored. Unset coordinates read as a fresh default. Memory is bounded
    by a maintenance pass that evicts expired entries and then, if still
    over capacity, the least recently gathered ones.
    """

    def __init__(self, config: HarvestConfig | None = None, now_ms: int = 0) -> None:
        config = config or HarvestConfig()
        self._states: dict[Coord, LocationState] = {}
        self.max_location_states = config.max_location_states
        self.cleanup_interval_ms = config.cleanup_interval_ms
        self.location_expiry_ms = config.location_expiry_ms
        self._depleted_threshold = config.depleted_threshold
        self._last_cleanup_ms = now_ms

    @property
    def last_cleanup_ms(self) -> int:
        return self._last_cleanup_ms

    def __len__(self) -> int:
        return len(self._states)

    def __contains__(self, coord: object) -> bool:
        return coord in self._states

    def __iter__(self) -> Iterator[LocationState]:
        return iter(list(self._states.values()))

    # --- Access ---

    def get(self, x: int, y: int) -> LocationState:
        """Copy of the stored record, or a fresh default for unseen coordinates."""
        state = self._states.get((x, y))
        if state is None:
            return LocationState(x=x, y=y)
        return dataclasses.replace(state)

    def put(self, x: int, y: int, state: LocationState) -> None:
        self._states[(x, y)] = dataclasses.replace(state, x=x, y=y)

    def coords(self) -> list[Coord]:
        return list(self._states.keys())

    def clear(self) -> None:
        self._states.clear()

    # --- Maintenance ---

    def maybe_cleanup(self, now_ms: int) -> bool:
        """Run a maintenance pass if one is due. Returns True if it ran.

        At most one pass per cleanup interval; within that limit a pass runs
        when the store is over capacity or the interval has been exceeded.
        """
        since = now_ms - self._last_cleanup_ms
        if since < self.cleanup_interval_ms:
            return False
        if len(self._states) > self.max_location_states or since > self.cleanup_interval_ms:
            self.cleanup(now_ms)
            self._last_cleanup_ms = now_ms
            return True
        return False

    def force_cleanup(self, now_ms: int) -> int:
        removed = self.cleanup(now_ms)
        self._last_cleanup_ms = now_ms
        return removed

    def cleanup(self, now_ms: int) -> int:
        """Evict expired entries, then the oldest until at capacity."""
        expired = [
            coord for coord, state in self._states.items()
            if now_ms - state.last_gathered_ms > self.location_expiry_ms
        ]
        for coord in expired:
            del self._states[coord]
        removed = len(expired)

        excess = len(self._states) - self.max_location_states
        if excess > 0:
            oldest = heapq.nsmallest(
                excess, self._states.items(), key=lambda item: item[1].last_gathered_ms
            )
            for coord, _state in oldest:
                del self._states[coord]
            removed += excess

        if removed:
            logger.info("Cleaned up %d old location states", removed)
        return removed

    def optimize(self, now_ms: int) -> int:
        """Drop nearly-regenerated entries idle for over half the expiry window."""
        stale = [
            coord for coord, state in self._states.items()
            if state.depletion <= _ACTIVE_DEPLETION
            and now_ms - state.last_gathered_ms > self.location_expiry_ms / 2
        ]
        for coord in stale:
            del self._states[coord]
        if stale:
            logger.info("Optimized %d location states", len(stale))
        return len(stale)

    # --- Introspection ---

    def stats(self) -> CleanupStats:
        return CleanupStats(
            total_location_states=len(self._states),
            max_location_states=self.max_location_states,
            last_cleanup_ms=self._last_cleanup_ms,
            cleanup_interval_ms=self.cleanup_interval_ms,
            location_expiry_ms=self.location_expiry_ms,
        )

    def metrics(self, now_ms: int) -> StoreMetrics:
        active = depleted = recent = 0
        for state in self._states.values():
            if state.depletion > _ACTIVE_DEPLETION:
                active += 1
            if state.depletion >= self._depleted_threshold:
                depleted += 1
            if now_ms - state.last_gathered_ms < _RECENT_MS:
                recent += 1
        return StoreMetrics(
            total_location_states=len(self._states),
            active_locations=active,
            depleted_locations=depleted,
            recently_accessed=recent,
            memory_estimate=len(self._states) * _BYTES_PER_ENTRY,
            last_cleanup_ms=self._last_cleanup_ms,
            next_cleanup_in_ms=max(
                0, self.cleanup_interval_ms - (now_ms - self._last_cleanup_ms)
            ),
        )

    # --- Snapshot / Restore ---

    def snapshot(self) -> dict[str, Any]:
        """Serialize store state. Keys are "x,y" strings."""
        states: dict[str, dict[str, Any]] = {}
        for (x, y), state in self._states.items():
            states[f"{x},{y}"] = {
                "x": state.x,
                "y": state.y,
                "lastGathered": state.last_gathered_ms,
                "depletionLevel": state.depletion,
                "totalGathers": state.total_gathers,
            }
        return {
            "maxLocationStates": self.max_location_states,
            "cleanupInterval": self.cleanup_interval_ms,
            "locationExpiryTime": self.location_expiry_ms,
            "lastCleanup": self._last_cleanup_ms,
            "locationStates": states,
        }

    def restore(self, data: dict[str, Any]) -> None:
        """Replace store contents from snapshot data.

        Every entry and setting is parsed before anything is replaced, so
        bad data raises (ValueError, KeyError or TypeError) with the store
        untouched.
        """
        states: dict[Coord, LocationState] = {}
        for key, fields in (data.get("locationStates") or {}).items():
            x, y = _parse_key(key)
            if not isinstance(fields, dict):
                raise TypeError(f"Location entry {key!r} must be an object")
            state = LocationState(
                x=_number(fields.get("x", x), int),
                y=_number(fields.get("y", y), int),
                last_gathered_ms=_number(fields.get("lastGathered", 0), int),
                depletion=_number(fields.get("depletionLevel", 0.0), float),
                total_gathers=_number(fields.get("totalGathers", 0), int),
            )
            if (state.x, state.y) != (x, y):
                raise ValueError(f"Location entry {key!r} holds ({state.x}, {state.y})")
            if not 0.0 <= state.depletion <= 1.0:
                raise ValueError(f"depletionLevel out of range at {key!r}: {state.depletion}")
            if state.total_gathers < 0:
                raise ValueError(f"totalGathers negative at {key!r}")
            states[(x, y)] = state

        # Same limits as HarvestConfig; raises ValueError on a bad setting.
        limits = HarvestConfig(
            max_location_states=_setting(data, "maxLocationStates", self.max_location_states),
            cleanup_interval_ms=_setting(data, "cleanupInterval", self.cleanup_interval_ms),
            location_expiry_ms=_setting(data, "locationExpiryTime", self.location_expiry_ms),
        )
        last_cleanup = _setting(data, "lastCleanup", self._last_cleanup_ms)

        self._states = states
        self.max_location_states = limits.max_location_states
        self.cleanup_interval_ms = limits.cleanup_interval_ms
        self.location_expiry_ms = limits.location_expiry_ms
        self._last_cleanup_ms = last_cleanup


def _parse_key(key: str) -> Coord:
    parts = key.split(",")
    if len(parts) != 2:
        raise ValueError(f"Bad location key: {key!r}")
    return int(parts[0]), int(parts[1])


def _setting(data: dict[str, Any], key: str, default: int) -> int:
    value = data.get(key)
    return default if value is None else _number(value, int)


def _number(value: Any, kind: type) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Expected a number, got {value!r}")
    if kind is int:
        if isinstance(value, float) and not value.is_integer():
            raise ValueError(f"Expected an integer, got {value!r}")
        return int(value)
    return float(value)
