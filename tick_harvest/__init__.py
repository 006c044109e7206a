"""tick-harvest — Deterministic resource gathering over an unbounded grid."""
from tick_harvest.catalog import ResourceCatalog, ResourceDetails, default_catalog
from tick_harvest.clock import Clock, ManualClock, SystemClock
from tick_harvest.config import HarvestConfig
from tick_harvest.examine import Examination, GatheringPreview, ResourceOdds
from tick_harvest.inventory import (
    Inventory,
    InventoryHelper,
    InventorySink,
    InventorySinkAdapter,
)
from tick_harvest.persistence import (
    deserialize_location_states,
    serialize_location_states,
)
from tick_harvest.resolver import GatherResolver
from tick_harvest.rng import SeededRandom, hash_seed
from tick_harvest.store import LocationStore
from tick_harvest.terrain import BiomeMap, GlyphHint, GlyphHinter, Terrain, TileInfo
from tick_harvest.types import (
    FALLBACK_GLYPH,
    BiomeProfile,
    CleanupStats,
    CommitResult,
    GatherOutcome,
    GatherResult,
    GlyphWeight,
    LocationDataError,
    LocationState,
    ResourceDef,
    ResourceYield,
    RestoreResult,
    StoreMetrics,
)

__all__ = [
    "BiomeMap",
    "BiomeProfile",
    "CleanupStats",
    "Clock",
    "CommitResult",
    "Examination",
    "FALLBACK_GLYPH",
    "GatherOutcome",
    "GatherResolver",
    "GatherResult",
    "GatheringPreview",
    "GlyphHint",
    "GlyphHinter",
    "GlyphWeight",
    "HarvestConfig",
    "Inventory",
    "InventoryHelper",
    "InventorySink",
    "InventorySinkAdapter",
    "LocationDataError",
    "LocationState",
    "LocationStore",
    "ManualClock",
    "ResourceCatalog",
    "ResourceDef",
    "ResourceDetails",
    "ResourceOdds",
    "ResourceYield",
    "RestoreResult",
    "SeededRandom",
    "StoreMetrics",
    "SystemClock",
    "Terrain",
    "TileInfo",
    "default_catalog",
    "deserialize_location_states",
    "hash_seed",
    "serialize_location_states",
]
