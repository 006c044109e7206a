"""Inventory component, helper functions and the sink the resolver commits to."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from tick_harvest.catalog import ResourceCatalog
from tick_harvest.types import CommitResult


class InventorySink(Protocol):
    def has_capacity(self, quantity: int) -> bool: ...
    def commit(self, resource: str, quantity: int) -> CommitResult: ...


@dataclass
class Inventory:
    """Mutable inventory storing resource quantities.

    Attributes:
        slots: Mapping of resource_name -> quantity.
        capacity: Maximum total quantity across all resources (-1 for unlimited).
    """

    slots: dict[str, int] = field(default_factory=dict)
    capacity: int = -1


class InventoryHelper:
    """Pure functions over an Inventory's slots."""

    @staticmethod
    def add(inv: Inventory, name: str, amount: int) -> None:
        """Add *amount* of a resource. All or nothing: raises if it does not fit."""
        if amount <= 0:
            raise ValueError(f"amount must be > 0, got {amount}")
        if not InventoryHelper.has_space(inv, amount):
            raise ValueError(f"no room for {amount} {name}")
        inv.slots[name] = inv.slots.get(name, 0) + amount

    @staticmethod
    def count(inv: Inventory, name: str) -> int:
        return inv.slots.get(name, 0)

    @staticmethod
    def total(inv: Inventory) -> int:
        return sum(inv.slots.values())

    @staticmethod
    def has_space(inv: Inventory, amount: int = 1) -> bool:
        if amount < 0:
            return False
        return inv.capacity == -1 or InventoryHelper.total(inv) + amount <= inv.capacity

    @staticmethod
    def names(inv: Inventory) -> list[str]:
        return list(inv.slots.keys())


class InventorySinkAdapter:
    """Exposes an Inventory as an InventorySink.

    With a catalog, commits that would push a resource past its
    ``max_stack`` are rejected even when total capacity allows them.
    """

    def __init__(self, inventory: Inventory, catalog: ResourceCatalog | None = None) -> None:
        self.inventory = inventory
        self._catalog = catalog

    def has_capacity(self, quantity: int) -> bool:
        return InventoryHelper.has_space(self.inventory, quantity)

    def commit(self, resource: str, quantity: int) -> CommitResult:
        if not resource or quantity <= 0:
            return CommitResult(False, "Invalid resource or quantity")
        if not self.has_capacity(quantity):
            return CommitResult(False, "Inventory full! Cannot add more resources.")
        if self._catalog is not None:
            defn = self._catalog.get(resource)
            current = InventoryHelper.count(self.inventory, resource)
            if defn is not None and defn.max_stack != -1 and current + quantity > defn.max_stack:
                return CommitResult(
                    False, f"Cannot carry more than {defn.max_stack} {defn.display_name or resource}."
                )
        InventoryHelper.add(self.inventory, resource, quantity)
        return CommitResult(True, f"Added {quantity} {resource}")
