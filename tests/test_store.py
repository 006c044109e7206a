"""Tests for LocationStore access, eviction and metrics."""
from __future__ import annotations

from tick_harvest import HarvestConfig, LocationState, LocationStore

HOUR = 3_600_000
TEN_MIN = 600_000


def _state(x: int, y: int, last: int, depletion: float = 0.0, gathers: int = 1) -> LocationState:
    return LocationState(x=x, y=y, last_gathered_ms=last, depletion=depletion, total_gathers=gathers)


class TestAccess:
    def test_unknown_coordinate_reads_fresh_default(self) -> None:
        store = LocationStore()
        state = store.get(3, -4)
        assert state == LocationState(x=3, y=-4, last_gathered_ms=0, depletion=0.0, total_gathers=0)
        assert len(store) == 0

    def test_put_then_get(self) -> None:
        store = LocationStore()
        store.put(1, 2, _state(1, 2, 500, 0.3, 4))
        assert store.get(1, 2) == _state(1, 2, 500, 0.3, 4)
        assert (1, 2) in store

    def test_get_returns_copy(self) -> None:
        store = LocationStore()
        store.put(0, 0, _state(0, 0, 10, 0.5))
        copy = store.get(0, 0)
        copy.depletion = 1.0
        assert store.get(0, 0).depletion == 0.5

    def test_put_overwrites(self) -> None:
        store = LocationStore()
        store.put(0, 0, _state(0, 0, 10))
        store.put(0, 0, _state(0, 0, 20))
        assert len(store) == 1
        assert store.get(0, 0).last_gathered_ms == 20

    def test_coords_and_iteration(self) -> None:
        store = LocationStore()
        store.put(0, 0, _state(0, 0, 1))
        store.put(5, 5, _state(5, 5, 2))
        assert set(store.coords()) == {(0, 0), (5, 5)}
        assert {(s.x, s.y) for s in store} == {(0, 0), (5, 5)}


class TestCleanup:
    def test_expired_entries_removed(self) -> None:
        store = LocationStore()
        now = 10 * HOUR
        store.put(0, 0, _state(0, 0, now - HOUR - 1))
        store.put(1, 1, _state(1, 1, now - HOUR))
        store.put(2, 2, _state(2, 2, now))
        removed = store.cleanup(now)
        assert removed == 1
        assert set(store.coords()) == {(1, 1), (2, 2)}

    def test_overflow_trims_oldest(self) -> None:
        store = LocationStore(HarvestConfig(max_location_states=3))
        now = HOUR
        for i in range(6):
            store.put(i, 0, _state(i, 0, now - 1000 * (6 - i)))
        removed = store.cleanup(now)
        assert removed == 3
        assert len(store) == 3
        assert set(store.coords()) == {(3, 0), (4, 0), (5, 0)}

    def test_no_survivor_older_than_evicted(self) -> None:
        store = LocationStore(HarvestConfig(max_location_states=10))
        now = HOUR
        stamps = [(i * 7919) % 1000 for i in range(40)]
        for i, stamp in enumerate(stamps):
            store.put(i, i, _state(i, i, now - stamp))
        before = {(s.x, s.y): s.last_gathered_ms for s in store}
        store.cleanup(now)
        survivors = {(s.x, s.y) for s in store}
        evicted = set(before) - survivors
        assert len(store) == 10
        assert min(before[c] for c in survivors) >= max(before[c] for c in evicted)

    def test_under_cap_and_fresh_untouched(self) -> None:
        store = LocationStore()
        store.put(0, 0, _state(0, 0, 100))
        assert store.cleanup(200) == 0
        assert len(store) == 1

    def test_maybe_cleanup_waits_for_interval(self) -> None:
        store = LocationStore(HarvestConfig(max_location_states=1), now_ms=0)
        store.put(0, 0, _state(0, 0, 1))
        store.put(1, 0, _state(1, 0, 2))
        assert store.maybe_cleanup(TEN_MIN - 1) is False
        assert len(store) == 2

    def test_maybe_cleanup_runs_when_over_capacity(self) -> None:
        store = LocationStore(HarvestConfig(max_location_states=1), now_ms=0)
        store.put(0, 0, _state(0, 0, TEN_MIN - 5))
        store.put(1, 0, _state(1, 0, TEN_MIN - 1))
        assert store.maybe_cleanup(TEN_MIN) is True
        assert store.coords() == [(1, 0)]
        assert store.last_cleanup_ms == TEN_MIN

    def test_maybe_cleanup_at_exact_interval_under_cap_skips(self) -> None:
        store = LocationStore(now_ms=0)
        store.put(0, 0, _state(0, 0, 1))
        assert store.maybe_cleanup(TEN_MIN) is False
        assert store.last_cleanup_ms == 0

    def test_maybe_cleanup_runs_after_interval(self) -> None:
        store = LocationStore(now_ms=0)
        store.put(0, 0, _state(0, 0, 0))
        store.put(1, 0, _state(1, 0, 2 * HOUR))
        assert store.maybe_cleanup(2 * HOUR) is True
        assert store.coords() == [(1, 0)]

    def test_force_cleanup_ignores_interval(self) -> None:
        store = LocationStore(now_ms=0)
        store.put(0, 0, _state(0, 0, 0))
        assert store.force_cleanup(HOUR + 1) == 1
        assert store.last_cleanup_ms == HOUR + 1

    def test_optimize_drops_idle_regenerated(self) -> None:
        store = LocationStore()
        now = 10 * HOUR
        store.put(0, 0, _state(0, 0, now - HOUR // 2 - 1, depletion=0.05))
        store.put(1, 0, _state(1, 0, now - HOUR // 2 - 1, depletion=0.5))
        store.put(2, 0, _state(2, 0, now, depletion=0.0))
        assert store.optimize(now) == 1
        assert set(store.coords()) == {(1, 0), (2, 0)}


class TestIntrospection:
    def test_stats(self) -> None:
        store = LocationStore(now_ms=42)
        store.put(0, 0, _state(0, 0, 1))
        stats = store.stats()
        assert stats.total_location_states == 1
        assert stats.max_location_states == 1000
        assert stats.last_cleanup_ms == 42
        assert stats.cleanup_interval_ms == TEN_MIN
        assert stats.location_expiry_ms == HOUR

    def test_metrics(self) -> None:
        store = LocationStore(now_ms=0)
        now = HOUR
        store.put(0, 0, _state(0, 0, now - 1000, depletion=0.9))
        store.put(1, 0, _state(1, 0, now - 400_000, depletion=0.3))
        store.put(2, 0, _state(2, 0, now - 1000, depletion=0.05))
        metrics = store.metrics(now)
        assert metrics.total_location_states == 3
        assert metrics.active_locations == 2
        assert metrics.depleted_locations == 1
        assert metrics.recently_accessed == 2
        assert metrics.memory_estimate == 300
        assert metrics.next_cleanup_in_ms == 0

    def test_next_cleanup_countdown(self) -> None:
        store = LocationStore(now_ms=1000)
        assert store.metrics(1000 + 60_000).next_cleanup_in_ms == TEN_MIN - 60_000
