"""Gathering configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HarvestConfig:
    """Immutable tuning for the gather resolver and its location store.

    Attributes:
        max_location_states: Store size above which the oldest entries are evicted.
        cleanup_interval_ms: Minimum time between maintenance passes.
        location_expiry_ms: Entries untouched for longer than this are evicted.
        depleted_threshold: Effective depletion at which gathering is refused.
        visual_depletion_threshold: Effective depletion at which tiles render depleted.
        hint_bias: Chance of taking the resource a tile glyph advertises.
        depletion_penalty: Success rate lost per unit of depletion.
        quantity_penalty: Fraction of the quantity range lost at full depletion.
        wait_bonus_cap: Largest success bonus for leaving a tile alone.
        wait_bonus_window_ms: Idle time needed to earn the full wait bonus.
        min_success_rate: Floor of the success rate.
        max_success_rate: Ceiling of the success rate.
    """

    max_location_states: int = 1000
    cleanup_interval_ms: int = 600_000
    location_expiry_ms: int = 3_600_000
    depleted_threshold: float = 0.8
    visual_depletion_threshold: float = 0.4
    hint_bias: float = 0.7
    depletion_penalty: float = 0.7
    quantity_penalty: float = 0.5
    wait_bonus_cap: float = 0.2
    wait_bonus_window_ms: int = 300_000
    min_success_rate: float = 0.10
    max_success_rate: float = 0.95

    def __post_init__(self) -> None:
        if self.max_location_states < 0:
            raise ValueError(
                f"max_location_states must be >= 0, got {self.max_location_states}"
            )
        if self.cleanup_interval_ms < 0:
            raise ValueError(
                f"cleanup_interval_ms must be >= 0, got {self.cleanup_interval_ms}"
            )
        if self.location_expiry_ms <= 0:
            raise ValueError(
                f"location_expiry_ms must be > 0, got {self.location_expiry_ms}"
            )
        if self.wait_bonus_window_ms <= 0:
            raise ValueError(
                f"wait_bonus_window_ms must be > 0, got {self.wait_bonus_window_ms}"
            )
        for name in ("depleted_threshold", "visual_depletion_threshold", "hint_bias",
                     "quantity_penalty"):
            value = getattr(self, name)
            if not 0 <= value <= 1:
                raise ValueError(f"{name} must be in [0, 1], got {value}")
        if not 0 <= self.min_success_rate <= self.max_success_rate <= 1:
            raise ValueError(
                f"success rate bounds must satisfy 0 <= min <= max <= 1, got "
                f"{self.min_success_rate}..{self.max_success_rate}"
            )
