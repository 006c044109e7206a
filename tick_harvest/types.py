"""Core data types for resource gathering."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

Coord = tuple[int, int]

FALLBACK_GLYPH = "biome_fallback"


@dataclass(frozen=True)
class ResourceDef:
    """Immutable resource type definition.

    Attributes:
        name: Unique identifier for this resource type.
        display_name: Human readable name.
        description: One-line flavour text.
        category: Grouping such as "material" or "food".
        max_stack: Maximum quantity per inventory slot (-1 for unlimited).
        rarity: Rarity tier name (common, uncommon, rare, epic, legendary).
        icon: Web channel icon.
        char: Terminal channel character.
        glyphs: Channel name -> glyph shown on a fresh tile.
        depleted_glyphs: Channel name -> glyph shown on a depleted tile.
        color: Hex color for a fresh tile.
        depleted_color: Hex color for a depleted tile (empty to reuse color).
    """

    name: str
    display_name: str = ""
    description: str = ""
    category: str = "material"
    max_stack: int = 99
    rarity: str = "common"
    icon: str = "?"
    char: str = "?"
    glyphs: Mapping[str, str] = field(default_factory=dict, hash=False)
    depleted_glyphs: Mapping[str, str] = field(default_factory=dict, hash=False)
    color: str = ""
    depleted_color: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("ResourceDef name must be non-empty")
        if self.max_stack < -1:
            raise ValueError(f"max_stack must be >= -1, got {self.max_stack}")
        # Read-only copies so definitions shared between catalogs stay fixed.
        object.__setattr__(self, "glyphs", MappingProxyType(dict(self.glyphs)))
        object.__setattr__(self, "depleted_glyphs", MappingProxyType(dict(self.depleted_glyphs)))


@dataclass(frozen=True)
class ResourceYield:
    """One weighted entry in a biome's resource table."""

    resource: str
    weight: float
    min_quantity: int = 1
    max_quantity: int = 1

    def __post_init__(self) -> None:
        if not self.resource:
            raise ValueError("ResourceYield resource must be non-empty")
        if self.weight <= 0:
            raise ValueError(f"weight must be > 0, got {self.weight}")
        if self.min_quantity < 1:
            raise ValueError(f"min_quantity must be >= 1, got {self.min_quantity}")
        if self.max_quantity < self.min_quantity:
            raise ValueError(
                f"max_quantity must be >= min_quantity, got "
                f"{self.max_quantity} < {self.min_quantity}"
            )


@dataclass(frozen=True)
class GlyphWeight:
    glyph: str
    weight: float

    def __post_init__(self) -> None:
        if self.weight <= 0:
            raise ValueError(f"weight must be > 0, got {self.weight}")


@dataclass(frozen=True)
class BiomeProfile:
    """Immutable per-biome gathering configuration.

    Attributes:
        biome: Biome identifier as reported by the terrain.
        resources: Ordered weighted resource table. Order matters for selection.
        glyph_distribution: Weighted tile glyphs, FALLBACK_GLYPH meaning plain terrain.
        base_success_rate: Success chance on a fresh tile, in (0, 1].
        depletion_rate: Depletion added per successful gather, in (0, 1].
        regeneration_ms: Time for a tile to recover fully.
    """

    biome: str
    resources: tuple[ResourceYield, ...]
    glyph_distribution: tuple[GlyphWeight, ...] = ()
    base_success_rate: float = 0.7
    depletion_rate: float = 0.1
    regeneration_ms: int = 300_000

    def __post_init__(self) -> None:
        if not self.biome:
            raise ValueError("BiomeProfile biome must be non-empty")
        if not self.resources:
            raise ValueError(f"BiomeProfile {self.biome!r} needs at least one resource")
        if not 0 < self.base_success_rate <= 1:
            raise ValueError(
                f"base_success_rate must be in (0, 1], got {self.base_success_rate}"
            )
        if not 0 < self.depletion_rate <= 1:
            raise ValueError(f"depletion_rate must be in (0, 1], got {self.depletion_rate}")
        if self.regeneration_ms <= 0:
            raise ValueError(f"regeneration_ms must be > 0, got {self.regeneration_ms}")

    @property
    def total_weight(self) -> float:
        return sum(r.weight for r in self.resources)

    def find(self, resource: str) -> ResourceYield | None:
        for entry in self.resources:
            if entry.resource == resource:
                return entry
        return None

    def probability(self, resource: str) -> int:
        """Rounded percentage chance of *resource* under weighted selection."""
        entry = self.find(resource)
        if entry is None:
            return 0
        return round(entry.weight / self.total_weight * 100)


@dataclass
class LocationState:
    """Mutable gathering history for one coordinate."""

    x: int
    y: int
    last_gathered_ms: int = 0
    depletion: float = 0.0
    total_gathers: int = 0


class GatherOutcome(str, Enum):
    SUCCESS = "success"
    NO_RESOURCE_HERE = "no_resource_here"
    LOCATION_DEPLETED = "location_depleted"
    GATHER_MISS = "gather_miss"
    INVENTORY_FULL = "inventory_full"
    SINK_REJECTED = "sink_rejected"


@dataclass(frozen=True)
class GatherResult:
    outcome: GatherOutcome
    message: str
    resource: str | None = None
    quantity: int = 0

    @property
    def success(self) -> bool:
        return self.outcome is GatherOutcome.SUCCESS


@dataclass(frozen=True)
class CommitResult:
    accepted: bool
    message: str = ""


@dataclass(frozen=True)
class RestoreResult:
    success: bool
    message: str


@dataclass(frozen=True)
class CleanupStats:
    total_location_states: int
    max_location_states: int
    last_cleanup_ms: int
    cleanup_interval_ms: int
    location_expiry_ms: int


@dataclass(frozen=True)
class StoreMetrics:
    total_location_states: int
    active_locations: int
    depleted_locations: int
    recently_accessed: int
    memory_estimate: int
    last_cleanup_ms: int
    next_cleanup_in_ms: int


class LocationDataError(Exception):
    """Raised on malformed serialized location data."""
