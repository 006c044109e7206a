"""Read-only examination of a location's gathering prospects."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tick_harvest.resolver import GatherResolver

_DIFFICULTY_TIERS: tuple[tuple[float, str, str], ...] = (
    (0.8, "This area appears completely picked clean.",
     "Resources will regenerate over time."),
    (0.6, "This area has been heavily gathered from recently.",
     "Success rate is significantly reduced."),
    (0.4, "This area shows signs of recent gathering activity.",
     "Success rate is moderately reduced."),
    (0.2, "This area has been lightly gathered from.",
     "Success rate is slightly reduced."),
)


@dataclass(frozen=True)
class ResourceOdds:
    resource: str
    name: str
    description: str
    rarity: str
    icon: str
    weight: float
    quantity: tuple[int, int]
    probability: int


@dataclass(frozen=True)
class GatheringPreview:
    """Percentages are rounded integers; regeneration_minutes is the full cycle."""

    success_rate: int
    depletion: int
    base_success_rate: int
    regeneration_minutes: int
    difficulty_hint: str
    depletion_hint: str
    regeneration_hint: str


@dataclass(frozen=True)
class Examination:
    success: bool
    message: str
    biome: str | None = None
    biome_name: str | None = None
    resources: tuple[ResourceOdds, ...] = ()
    gathering: GatheringPreview | None = None


def _difficulty(depletion: float) -> tuple[str, str]:
    for threshold, difficulty, hint in _DIFFICULTY_TIERS:
        if depletion >= threshold:
            return difficulty, hint
    return "This area appears untouched and resource-rich.", "Success rate is at maximum."


def examine_location(resolver: GatherResolver, x: int, y: int) -> Examination:
    """Describe what gathering at (x, y) would look like right now.

    Uses the same depletion and success-rate math as a real gather but
    writes nothing and draws nothing.
    """
    tile, profile = resolver.profile_at(x, y)
    if tile is None:
        return Examination(success=False, message="Invalid location")

    catalog = resolver.catalog
    biome_name = catalog.biome_display_name(tile.biome)
    if profile is None:
        return Examination(
            success=True,
            message=f"This {biome_name} contains no gatherable resources.",
            biome=tile.biome,
            biome_name=biome_name,
        )

    now = resolver.clock.now()
    state = resolver.store.get(x, y)
    elapsed = max(0, now - state.last_gathered_ms)
    depletion = resolver.decayed_depletion(state, profile, now)
    rate = resolver.success_rate(profile, depletion, elapsed)

    odds = []
    for entry in profile.resources:
        defn = catalog.get(entry.resource)
        odds.append(
            ResourceOdds(
                resource=entry.resource,
                name=defn.display_name if defn else entry.resource,
                description=defn.description if defn else "Unknown resource",
                rarity=defn.rarity if defn else "common",
                icon=defn.icon if defn else "?",
                weight=entry.weight,
                quantity=(entry.min_quantity, entry.max_quantity),
                probability=profile.probability(entry.resource),
            )
        )

    regeneration_hint = ""
    if depletion > 0:
        remaining = profile.regeneration_ms - elapsed
        if remaining <= 0:
            regeneration_hint = "Resources have fully regenerated."
        else:
            minutes = math.ceil(remaining / 60_000)
            regeneration_hint = f"Resources will fully regenerate in ~{minutes} minutes."

    difficulty_hint, depletion_hint = _difficulty(depletion)
    return Examination(
        success=True,
        message=f"You examine the {biome_name} carefully.",
        biome=tile.biome,
        biome_name=biome_name,
        resources=tuple(odds),
        gathering=GatheringPreview(
            success_rate=round(rate * 100),
            depletion=round(depletion * 100),
            base_success_rate=round(profile.base_success_rate * 100),
            regeneration_minutes=round(profile.regeneration_ms / 60_000),
            difficulty_hint=difficulty_hint,
            depletion_hint=depletion_hint,
            regeneration_hint=regeneration_hint,
        ),
    )
