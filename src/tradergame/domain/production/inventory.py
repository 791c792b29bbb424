from dataclasses import dataclass
from typing import Iterable, List, Tuple

from ..shared.exceptions import InsufficientResourcesError
from ..shared.value_objects import ResourceAmount


@dataclass(frozen=True)
class InventoryItem:
    """Stock of a single resource held by a facility"""
    resource_id: str
    quantity: int

    def __post_init__(self):
        if self.quantity < 0:
            raise ValueError("Inventory quantity cannot be negative")
        if not self.resource_id:
            raise ValueError("Inventory resource_id cannot be empty")


@dataclass(frozen=True)
class Inventory:
    """Facility inventory bounded by capacity"""
    items: tuple[InventoryItem, ...]   # Ordered by first arrival
    capacity: int
    current_usage: int

    def __post_init__(self):
        if self.capacity <= 0:
            raise ValueError("Inventory capacity must be positive")
        if self.current_usage < 0:
            raise ValueError("Inventory usage cannot be negative")
        if self.current_usage > self.capacity:
            raise ValueError(f"Inventory usage {self.current_usage} exceeds capacity {self.capacity}")

        item_sum = sum(item.quantity for item in self.items)
        if item_sum != self.current_usage:
            raise ValueError(f"Inventory sum {item_sum} != current usage {self.current_usage}")

        ids = [item.resource_id for item in self.items]
        if len(ids) != len(set(ids)):
            raise ValueError("Inventory holds duplicate resource entries")

    @classmethod
    def empty(cls, capacity: int) -> 'Inventory':
        return cls(items=(), capacity=capacity, current_usage=0)

    @classmethod
    def of(cls, capacity: int, stock: Iterable[Tuple[str, int]]) -> 'Inventory':
        """Build an inventory from (resource_id, quantity) pairs, skipping zeros"""
        items = tuple(InventoryItem(rid, qty) for rid, qty in stock if qty > 0)
        return cls(items=items, capacity=capacity, current_usage=sum(i.quantity for i in items))

    def quantity_of(self, resource_id: str) -> int:
        """Quantity held of a resource (0 if not present)"""
        for item in self.items:
            if item.resource_id == resource_id:
                return item.quantity
        return 0

    def available_capacity(self) -> int:
        return self.capacity - self.current_usage

    def has_all(self, required: Iterable[ResourceAmount]) -> bool:
        """Check every required amount is held"""
        return all(self.quantity_of(r.resource_id) >= r.quantity for r in required)

    def missing(self, required: Iterable[ResourceAmount]) -> List[Tuple[str, int, int]]:
        """(resource_id, required, available) for each amount not fully held"""
        shortfalls = []
        for r in required:
            available = self.quantity_of(r.resource_id)
            if available < r.quantity:
                shortfalls.append((r.resource_id, r.quantity, available))
        return shortfalls

    def add(self, resource_id: str, quantity: int) -> Tuple['Inventory', int]:
        """
        Add up to quantity of a resource, capped by remaining capacity.

        Returns:
            (new inventory, quantity actually applied). Anything beyond
            capacity is dropped.
        """
        if quantity < 0:
            raise ValueError("add quantity cannot be negative")

        applied = min(quantity, self.available_capacity())
        if applied == 0:
            return self, 0

        return self._with_quantity(resource_id, self.quantity_of(resource_id) + applied), applied

    def add_all(self, produced: Iterable[ResourceAmount]) -> Tuple['Inventory', Tuple[ResourceAmount, ...]]:
        """Add each amount in order, returning the amounts actually applied"""
        inventory = self
        applied = []
        for amount in produced:
            inventory, added = inventory.add(amount.resource_id, amount.quantity)
            applied.append(amount.with_quantity(added))
        return inventory, tuple(applied)

    def remove(self, resource_id: str, quantity: int) -> 'Inventory':
        """
        Remove quantity of a resource.

        Raises:
            InsufficientResourcesError: If less than quantity is held
        """
        if quantity < 0:
            raise ValueError("remove quantity cannot be negative")

        held = self.quantity_of(resource_id)
        if held < quantity:
            raise InsufficientResourcesError(
                f"Cannot remove {quantity} {resource_id}: only {held} held"
            )
        return self._with_quantity(resource_id, held - quantity)

    def remove_all(self, consumed: Iterable[ResourceAmount]) -> 'Inventory':
        """Remove every amount, all or nothing"""
        consumed = tuple(consumed)
        if not self.has_all(consumed):
            shortfalls = ", ".join(
                f"{rid} (need {need}, have {have})" for rid, need, have in self.missing(consumed)
            )
            raise InsufficientResourcesError(f"Missing resources: {shortfalls}")

        inventory = self
        for amount in consumed:
            inventory = inventory.remove(amount.resource_id, amount.quantity)
        return inventory

    def _with_quantity(self, resource_id: str, quantity: int) -> 'Inventory':
        items = []
        found = False
        for item in self.items:
            if item.resource_id == resource_id:
                found = True
                if quantity > 0:
                    items.append(InventoryItem(resource_id, quantity))
            else:
                items.append(item)
        if not found and quantity > 0:
            items.append(InventoryItem(resource_id, quantity))

        return Inventory(
            items=tuple(items),
            capacity=self.capacity,
            current_usage=sum(i.quantity for i in items),
        )

    def __repr__(self) -> str:
        return f"Inventory({self.current_usage}/{self.capacity})"
