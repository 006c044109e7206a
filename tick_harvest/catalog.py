"""ResourceCatalog class."""
from __future__ import annotations

from dataclasses import dataclass

from tick_harvest import defaults
from tick_harvest.types import BiomeProfile, ResourceDef


@dataclass(frozen=True)
class BiomeOccurrence:
    biome: str
    biome_name: str
    probability: int
    base_success_rate: int
    quantity: tuple[int, int]


@dataclass(frozen=True)
class ResourceDetails:
    definition: ResourceDef
    rarity: dict[str, str]
    found_in: tuple[BiomeOccurrence, ...]
    uses: tuple[str, ...]


class ResourceCatalog:
    """Read-mostly lookup tables for resource types and biome profiles.

    Lookups never raise for unknown names; they return None (or an empty
    list) so terrain that reports biomes the catalog has never heard of,
    such as open water, simply has nothing to gather.
    """

    def __init__(
        self,
        biome_names: dict[str, str] | None = None,
        rarities: dict[str, dict[str, str]] | None = None,
        uses: dict[str, tuple[str, ...]] | None = None,
    ) -> None:
        self._definitions: dict[str, ResourceDef] = {}
        self._biomes: dict[str, BiomeProfile] = {}
        self._biome_names = dict(biome_names or {})
        self._rarities = dict(rarities or {})
        self._uses = dict(uses or {})

    # --- Resource types ---

    def define(self, resource_def: ResourceDef) -> None:
        """Register a resource type. Overwrites if name exists."""
        self._definitions[resource_def.name] = resource_def

    def get(self, name: str) -> ResourceDef | None:
        return self._definitions.get(name)

    def has(self, name: str) -> bool:
        return name in self._definitions

    def defined_resources(self) -> list[str]:
        return list(self._definitions.keys())

    # --- Biomes ---

    def define_biome(self, profile: BiomeProfile) -> None:
        """Register a biome profile. Overwrites if the biome exists."""
        self._biomes[profile.biome] = profile

    def biome(self, biome: str) -> BiomeProfile | None:
        return self._biomes.get(biome)

    def biomes(self) -> list[str]:
        return list(self._biomes.keys())

    def biome_display_name(self, biome: str) -> str:
        return self._biome_names.get(biome, biome)

    # --- Glyphs ---

    def glyph(self, name: str, channel: str = "web", depleted: bool = False) -> str | None:
        """Glyph for a resource on an output channel.

        Depleted lookups fall back to the regular glyph when no depleted
        variant is defined.
        """
        defn = self._definitions.get(name)
        if defn is None:
            return None
        if depleted and channel in defn.depleted_glyphs:
            return defn.depleted_glyphs[channel]
        return defn.glyphs.get(channel)

    def color(self, name: str, depleted: bool = False) -> str | None:
        defn = self._definitions.get(name)
        if defn is None:
            return None
        if depleted and defn.depleted_color:
            return defn.depleted_color
        return defn.color or None

    def display_symbol(self, name: str, channel: str = "web", depleted: bool = False) -> str:
        """Icon (web) or character (terminal) used in listings; "?" if unknown."""
        defn = self._definitions.get(name)
        if defn is None:
            return "?"
        if depleted and channel in defn.depleted_glyphs:
            return defn.depleted_glyphs[channel]
        return defn.char if channel == "terminal" else defn.icon

    # --- Descriptive info ---

    def rarity_info(self, rarity: str) -> dict[str, str]:
        info = self._rarities.get(rarity) or self._rarities.get("common")
        return dict(info) if info else {"name": rarity.title()}

    def uses(self, name: str) -> tuple[str, ...]:
        return self._uses.get(name, ("Unknown uses",))

    def resource_details(self, name: str) -> ResourceDetails | None:
        defn = self._definitions.get(name)
        if defn is None:
            return None
        found_in: list[BiomeOccurrence] = []
        for biome_id, profile in self._biomes.items():
            entry = profile.find(name)
            if entry is None:
                continue
            found_in.append(
                BiomeOccurrence(
                    biome=biome_id,
                    biome_name=self.biome_display_name(biome_id),
                    probability=profile.probability(name),
                    base_success_rate=round(profile.base_success_rate * 100),
                    quantity=(entry.min_quantity, entry.max_quantity),
                )
            )
        return ResourceDetails(
            definition=defn,
            rarity=self.rarity_info(defn.rarity),
            found_in=tuple(found_in),
            uses=self.uses(name),
        )


def default_catalog() -> ResourceCatalog:
    """Catalog populated with the reference resource and biome tables."""
    catalog = ResourceCatalog(
        biome_names=defaults.BIOME_NAMES,
        rarities=defaults.RARITIES,
        uses=defaults.RESOURCE_USES,
    )
    for resource_def in defaults.RESOURCES:
        catalog.define(resource_def)
    for profile in defaults.BIOMES:
        catalog.define_biome(profile)
    return catalog
