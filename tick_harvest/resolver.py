"""GatherResolver - outcome of a single gather attempt."""
from __future__ import annotations

import logging
import math

from tick_harvest.catalog import ResourceCatalog, default_catalog
from tick_harvest.clock import Clock, SystemClock
from tick_harvest.config import HarvestConfig
from tick_harvest.examine import Examination, examine_location
from tick_harvest.inventory import InventorySink
from tick_harvest.persistence import (
    deserialize_location_states,
    serialize_location_states,
)
from tick_harvest.rng import SeededRandom
from tick_harvest.store import LocationStore
from tick_harvest.terrain import Terrain, TileInfo
from tick_harvest.types import (
    FALLBACK_GLYPH,
    BiomeProfile,
    CleanupStats,
    GatherOutcome,
    GatherResult,
    LocationState,
    ResourceYield,
    RestoreResult,
    StoreMetrics,
)

logger = logging.getLogger(__name__)


class GatherResolver:
    """Decides what one gather attempt at a coordinate yields.

    Owns the location store; draws from the injected stream in a fixed
    order so that two resolvers with the same seed, terrain and clock
    readings produce identical results:

    1. one draw for the success roll;
    2. one draw if the terrain hints a resource found in the biome;
    3. one draw for weighted selection, unless the hint was taken;
    4. one draw for the quantity.
    """

    def __init__(
        self,
        terrain: Terrain,
        rng: SeededRandom | None = None,
        catalog: ResourceCatalog | None = None,
        config: HarvestConfig | None = None,
        clock: Clock | None = None,
        seed: int | str | None = None,
    ) -> None:
        if rng is not None and seed is not None:
            raise ValueError("pass either rng or seed, not both")
        self._terrain = terrain
        self._rng = rng if rng is not None else SeededRandom(seed)
        self._catalog = catalog if catalog is not None else default_catalog()
        self._config = config or HarvestConfig()
        self._clock = clock or SystemClock()
        self._store = LocationStore(self._config, now_ms=self._clock.now())

    @property
    def terrain(self) -> Terrain:
        return self._terrain

    @property
    def rng(self) -> SeededRandom:
        return self._rng

    @property
    def catalog(self) -> ResourceCatalog:
        return self._catalog

    @property
    def config(self) -> HarvestConfig:
        return self._config

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def store(self) -> LocationStore:
        return self._store

    # --- Pure calculations ---

    def decayed_depletion(
        self, state: LocationState, profile: BiomeProfile, now_ms: int
    ) -> float:
        """Depletion after regeneration since the last gather. Never above stored."""
        elapsed = max(0, now_ms - state.last_gathered_ms)
        if elapsed >= profile.regeneration_ms:
            return 0.0
        return max(0.0, state.depletion * (1 - elapsed / profile.regeneration_ms))

    def success_rate(self, profile: BiomeProfile, depletion: float, elapsed_ms: int) -> float:
        cfg = self._config
        wait_bonus = min(cfg.wait_bonus_cap, max(0, elapsed_ms) / cfg.wait_bonus_window_ms)
        rate = profile.base_success_rate - depletion * cfg.depletion_penalty + wait_bonus
        return min(cfg.max_success_rate, max(cfg.min_success_rate, rate))

    def quantity_range(self, entry: ResourceYield, depletion: float) -> tuple[int, int]:
        """Quantity bounds shrunk by up to quantity_penalty at full depletion."""
        shrink = 1 - depletion * self._config.quantity_penalty
        lo = max(1, math.floor(entry.min_quantity * shrink))
        hi = max(lo, math.floor(entry.max_quantity * shrink))
        return lo, hi

    # --- Queries ---

    def profile_at(self, x: int, y: int) -> tuple[TileInfo | None, BiomeProfile | None]:
        tile = self._terrain.biome_at(x, y)
        if tile is None:
            return None, None
        return tile, self._catalog.biome(tile.biome)

    def location_state(self, x: int, y: int) -> LocationState:
        return self._store.get(x, y)

    def effective_depletion(self, x: int, y: int) -> float:
        _tile, profile = self.profile_at(x, y)
        if profile is None:
            return 0.0
        return self.decayed_depletion(self._store.get(x, y), profile, self._clock.now())

    def is_depleted(self, x: int, y: int) -> bool:
        """Stored depletion at or past the gathering cutoff, ignoring regeneration."""
        return self._store.get(x, y).depletion >= self._config.depleted_threshold

    def is_visually_depleted(self, x: int, y: int) -> bool:
        return self.effective_depletion(x, y) >= self._config.visual_depletion_threshold

    def examine(self, x: int, y: int) -> Examination:
        return examine_location(self, x, y)

    # --- Gathering ---

    def gather(self, x: int, y: int, sink: InventorySink) -> GatherResult:
        now = self._clock.now()
        tile, profile = self.profile_at(x, y)
        if tile is None:
            return self._finish(x, y, GatherResult(GatherOutcome.NO_RESOURCE_HERE, "Invalid location"))
        if profile is None:
            return self._finish(
                x, y, GatherResult(GatherOutcome.NO_RESOURCE_HERE, "Nothing to gather here")
            )

        state = self._store.get(x, y)
        elapsed = max(0, now - state.last_gathered_ms)
        depletion = self.decayed_depletion(state, profile, now)
        state.depletion = depletion

        if depletion >= self._config.depleted_threshold:
            self._store.put(x, y, state)
            return self._finish(
                x, y,
                GatherResult(
                    GatherOutcome.LOCATION_DEPLETED,
                    "This area has been picked clean. Try again later.",
                ),
            )

        rate = self.success_rate(profile, depletion, elapsed)
        if self._rng.next() > rate:
            self._record_attempt(state, now)
            return self._finish(
                x, y,
                GatherResult(
                    GatherOutcome.GATHER_MISS, "You search around but find nothing useful."
                ),
            )

        entry = self._select_resource(profile, tile, x, y)
        lo, hi = self.quantity_range(entry, depletion)
        quantity = max(1, self._rng.randint(lo, hi))

        # No state write when the sink is full: the tile neither depletes
        # nor restarts its regeneration clock.
        if not sink.has_capacity(quantity):
            return self._finish(
                x, y,
                GatherResult(
                    GatherOutcome.INVENTORY_FULL,
                    "Inventory full! Cannot gather more resources.",
                    resource=entry.resource,
                    quantity=quantity,
                ),
            )

        committed = sink.commit(entry.resource, quantity)
        if not committed.accepted:
            return self._finish(
                x, y,
                GatherResult(
                    GatherOutcome.SINK_REJECTED,
                    committed.message or "Could not store the gathered resources.",
                    resource=entry.resource,
                    quantity=quantity,
                ),
            )

        state.depletion = min(1.0, depletion + profile.depletion_rate)
        self._record_attempt(state, now)

        defn = self._catalog.get(entry.resource)
        name = defn.display_name if defn is not None and defn.display_name else entry.resource
        return self._finish(
            x, y,
            GatherResult(
                GatherOutcome.SUCCESS,
                f"Gathered {quantity} {name}!",
                resource=entry.resource,
                quantity=quantity,
            ),
        )

    def _select_resource(
        self, profile: BiomeProfile, tile: TileInfo, x: int, y: int
    ) -> ResourceYield:
        resource_hint = getattr(self._terrain, "resource_hint", None)
        if resource_hint is not None:
            hint = resource_hint(x, y, tile.biome, self)
            if hint is not None and hint.resource and hint.resource != FALLBACK_GLYPH:
                hinted = profile.find(hint.resource)
                if hinted is not None and self._rng.next() < self._config.hint_bias:
                    return hinted

        roll = self._rng.next() * profile.total_weight
        cumulative = 0.0
        for entry in profile.resources:
            cumulative += entry.weight
            if roll <= cumulative:
                return entry
        return profile.resources[0]

    def _record_attempt(self, state: LocationState, now_ms: int) -> None:
        state.last_gathered_ms = now_ms
        state.total_gathers += 1
        self._store.put(state.x, state.y, state)
        self._store.maybe_cleanup(now_ms)

    def _finish(self, x: int, y: int, result: GatherResult) -> GatherResult:
        logger.debug(
            "gather at (%d, %d): %s %s x%d",
            x, y, result.outcome.value, result.resource, result.quantity,
        )
        return result

    # --- Maintenance and persistence ---

    def cleanup_stats(self) -> CleanupStats:
        return self._store.stats()

    def metrics(self) -> StoreMetrics:
        return self._store.metrics(self._clock.now())

    def force_cleanup(self) -> int:
        return self._store.force_cleanup(self._clock.now())

    def optimize(self) -> int:
        return self._store.optimize(self._clock.now())

    def serialize_location_states(self) -> str:
        return serialize_location_states(self._store, self._clock.now())

    def deserialize_location_states(self, text: str | None) -> RestoreResult:
        return deserialize_location_states(self._store, text)
