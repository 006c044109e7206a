"""Terrain collaborator protocol, a sparse biome map and tile hints."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from tick_harvest.catalog import ResourceCatalog
from tick_harvest.rng import SeededRandom
from tick_harvest.types import FALLBACK_GLYPH, Coord

if TYPE_CHECKING:
    from tick_harvest.resolver import GatherResolver


@dataclass(frozen=True)
class TileInfo:
    biome: str
    elevation: float = 0.5


@dataclass(frozen=True)
class GlyphHint:
    """Resource a tile advertises through its glyph (None for plain terrain)."""

    resource: str | None
    depleted: bool = False


class Terrain(Protocol):
    """What the resolver needs from the world.

    Implementations may also provide
    ``resource_hint(x, y, biome, resolver) -> GlyphHint | None``; when
    present, the advertised resource biases selection. Every instance that
    must stay in lockstep has to agree on whether a hint exists per tile,
    since a hint costs one extra draw.
    """

    def biome_at(self, x: int, y: int) -> TileInfo | None: ...


class GlyphHinter:
    """Position-seeded choice of the resource glyph a tile displays.

    Each tile gets its own throwaway stream, so the answer depends only on
    the world seed and the coordinate, never on draw history.
    """

    def __init__(self, world_seed: int, catalog: ResourceCatalog) -> None:
        self._world_seed = world_seed
        self._catalog = catalog

    @property
    def world_seed(self) -> int:
        return self._world_seed

    def position_seed(self, x: int, y: int) -> int:
        return self._world_seed + x * 1000 + y * 1_000_000

    def pick(self, x: int, y: int, biome: str) -> str | None:
        """Resource glyph shown at (x, y), or None for plain terrain."""
        profile = self._catalog.biome(biome)
        if profile is None or not profile.glyph_distribution:
            return None
        total = sum(g.weight for g in profile.glyph_distribution)
        roll = SeededRandom(self.position_seed(x, y)).next() * total
        cumulative = 0.0
        for entry in profile.glyph_distribution:
            cumulative += entry.weight
            if roll <= cumulative:
                return None if entry.glyph == FALLBACK_GLYPH else entry.glyph
        return None


class BiomeMap:
    """Sparse biome storage implementing the Terrain protocol.

    Unset coordinates report the default biome; a default of None makes
    them off-map.
    """

    def __init__(
        self,
        default: str | None = None,
        hinter: GlyphHinter | None = None,
        elevation: float = 0.5,
    ) -> None:
        self._default = default
        self._hinter = hinter
        self._elevation = elevation
        self._cells: dict[Coord, str] = {}

    @property
    def default(self) -> str | None:
        return self._default

    def set(self, coord: Coord, biome: str) -> None:
        if biome == self._default:
            self._cells.pop(coord, None)
        else:
            self._cells[coord] = biome

    def fill_rect(self, corner1: Coord, corner2: Coord, biome: str) -> None:
        """Fill a rectangle (inclusive) with a biome."""
        x1, y1 = min(corner1[0], corner2[0]), min(corner1[1], corner2[1])
        x2, y2 = max(corner1[0], corner2[0]), max(corner1[1], corner2[1])
        for x in range(x1, x2 + 1):
            for y in range(y1, y2 + 1):
                self.set((x, y), biome)

    def clear(self, coord: Coord) -> None:
        self._cells.pop(coord, None)

    def biome_at(self, x: int, y: int) -> TileInfo | None:
        biome = self._cells.get((x, y), self._default)
        if biome is None:
            return None
        return TileInfo(biome=biome, elevation=self._elevation)

    def resource_hint(
        self, x: int, y: int, biome: str, resolver: GatherResolver
    ) -> GlyphHint | None:
        if self._hinter is None:
            return None
        resource = self._hinter.pick(x, y, biome)
        if resource is None:
            return None
        return GlyphHint(resource=resource, depleted=resolver.is_visually_depleted(x, y))
