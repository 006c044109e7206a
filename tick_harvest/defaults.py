"""Reference resource and biome tables."""
from __future__ import annotations

from tick_harvest.types import (
    FALLBACK_GLYPH,
    BiomeProfile,
    GlyphWeight,
    ResourceDef,
    ResourceYield,
)

RESOURCES: tuple[ResourceDef, ...] = (
    ResourceDef(
        name="stone",
        display_name="Stone",
        description="Sturdy building and tool material",
        icon="🪨",
        char="◆",
        glyphs={"web": "🪨", "terminal": "◆"},
        depleted_glyphs={"web": "🗿", "terminal": "◇"},
        color="#7f8c8d",
        depleted_color="#95a5a6",
    ),
    ResourceDef(
        name="sand",
        display_name="Sand",
        description="Fine granules for glass-making and construction",
        icon="🏖️",
        char="∴",
        glyphs={"web": "🏖️", "terminal": "∴"},
        depleted_glyphs={"web": "⏳", "terminal": "∵"},
        color="#f39c12",
        depleted_color="#d68910",
    ),
    ResourceDef(
        name="wood",
        display_name="Wood",
        description="Primary building and fuel material",
        icon="🌳",
        char="♠",
        glyphs={"web": "🌳", "terminal": "♠"},
        depleted_glyphs={"web": "🪵", "terminal": "♤"},
        color="#27ae60",
        depleted_color="#58d68d",
    ),
    ResourceDef(
        name="hay",
        display_name="Hay",
        description="Animal feed and thatching material",
        icon="🌾",
        char='"',
        glyphs={"web": "🌾", "terminal": '"'},
        depleted_glyphs={"web": "🌱", "terminal": "."},
        color="#f1c40f",
        depleted_color="#f4d03f",
    ),
    ResourceDef(
        name="ore",
        display_name="Ore",
        description="Metal crafting material",
        rarity="uncommon",
        icon="⛏️",
        char="▲",
        glyphs={"web": "⛏️", "terminal": "▲"},
        depleted_glyphs={"web": "⚒️", "terminal": "△"},
        color="#34495e",
        depleted_color="#5d6d7e",
    ),
    ResourceDef(
        name="berries",
        display_name="Berries",
        description="Food and preservation material",
        category="food",
        icon="🫐",
        char="*",
        glyphs={"web": "🫐", "terminal": "*"},
        depleted_glyphs={"web": "🍃", "terminal": "°"},
        color="#e74c3c",
        depleted_color="#ec7063",
    ),
    ResourceDef(
        name="reeds",
        display_name="Reeds",
        description="Rope-making and weaving material",
        icon="🌿",
        char="|",
        glyphs={"web": "🌿", "terminal": "|"},
        depleted_glyphs={"web": "🌾", "terminal": "¦"},
        color="#16a085",
        depleted_color="#48c9b0",
    ),
)


def _profile(
    biome: str,
    resources: list[tuple[str, int, int, int]],
    glyphs: list[tuple[str, int]],
    base_success_rate: float,
    depletion_rate: float,
    regeneration_ms: int,
) -> BiomeProfile:
    return BiomeProfile(
        biome=biome,
        resources=tuple(ResourceYield(r, w, lo, hi) for r, w, lo, hi in resources),
        glyph_distribution=tuple(GlyphWeight(g, w) for g, w in glyphs),
        base_success_rate=base_success_rate,
        depletion_rate=depletion_rate,
        regeneration_ms=regeneration_ms,
    )


BIOMES: tuple[BiomeProfile, ...] = (
    _profile("forest", [("wood", 60, 1, 3), ("berries", 40, 1, 2)],
             [("wood", 45), ("berries", 25), (FALLBACK_GLYPH, 30)],
             0.7, 0.1, 300_000),
    _profile("desert", [("stone", 60, 1, 2), ("sand", 40, 1, 3)],
             [("stone", 40), ("sand", 35), (FALLBACK_GLYPH, 25)],
             0.6, 0.15, 600_000),
    _profile("mountain", [("stone", 50, 1, 2), ("ore", 50, 1, 1)],
             [("stone", 35), ("ore", 25), (FALLBACK_GLYPH, 40)],
             0.5, 0.2, 900_000),
    _profile("beach", [("wood", 50, 1, 2), ("sand", 50, 1, 3)],
             [("wood", 30), ("sand", 40), (FALLBACK_GLYPH, 30)],
             0.65, 0.12, 450_000),
    _profile("jungle", [("wood", 60, 1, 3), ("berries", 40, 1, 2)],
             [("wood", 40), ("berries", 30), (FALLBACK_GLYPH, 30)],
             0.75, 0.08, 240_000),
    _profile("savanna", [("hay", 60, 1, 3), ("wood", 40, 1, 2)],
             [("hay", 45), ("wood", 25), (FALLBACK_GLYPH, 30)],
             0.7, 0.1, 360_000),
    _profile("taiga", [("wood", 60, 1, 3), ("berries", 40, 1, 2)],
             [("wood", 45), ("berries", 25), (FALLBACK_GLYPH, 30)],
             0.65, 0.12, 420_000),
    _profile("tropical", [("wood", 60, 1, 3), ("berries", 40, 1, 2)],
             [("wood", 40), ("berries", 30), (FALLBACK_GLYPH, 30)],
             0.8, 0.07, 180_000),
    _profile("swamp", [("reeds", 60, 1, 3), ("berries", 40, 1, 2)],
             [("reeds", 45), ("berries", 25), (FALLBACK_GLYPH, 30)],
             0.6, 0.15, 540_000),
)

BIOME_NAMES: dict[str, str] = {
    "forest": "Forest",
    "desert": "Desert",
    "mountain": "Mountain",
    "beach": "Beach",
    "jungle": "Jungle",
    "savanna": "Savanna",
    "taiga": "Taiga",
    "tropical": "Tropical Forest",
    "swamp": "Swamp",
    "ocean": "Ocean",
}

RARITIES: dict[str, dict[str, str]] = {
    "common": {
        "name": "Common",
        "color": "#95a5a6",
        "description": "Easily found in most locations",
    },
    "uncommon": {
        "name": "Uncommon",
        "color": "#3498db",
        "description": "Somewhat rare, requires specific conditions",
    },
    "rare": {
        "name": "Rare",
        "color": "#9b59b6",
        "description": "Difficult to find, valuable material",
    },
    "epic": {
        "name": "Epic",
        "color": "#e67e22",
        "description": "Very rare, highly sought after",
    },
    "legendary": {
        "name": "Legendary",
        "color": "#f1c40f",
        "description": "Extremely rare, legendary material",
    },
}

RESOURCE_USES: dict[str, tuple[str, ...]] = {
    "stone": ("Building construction", "Tool crafting", "Weapon making"),
    "sand": ("Glass production", "Construction material", "Filtration"),
    "wood": ("Building construction", "Fuel", "Tool handles", "Ship repairs"),
    "hay": ("Animal feed", "Thatching", "Bedding", "Insulation"),
    "ore": ("Metal tools", "Weapons", "Advanced construction", "Trading"),
    "berries": ("Food", "Medicine", "Dyes", "Preservation"),
    "reeds": ("Rope making", "Basket weaving", "Paper", "Thatching"),
}
