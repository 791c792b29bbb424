from dataclasses import dataclass
from typing import Iterable, Tuple


@dataclass(frozen=True)
class ResourceAmount:
    """Immutable quantity of a single resource"""
    resource_id: str
    quantity: int

    def __post_init__(self):
        if not self.resource_id:
            raise ValueError("resource_id cannot be empty")
        if self.quantity < 0:
            raise ValueError("resource quantity cannot be negative")

    def with_quantity(self, quantity: int) -> 'ResourceAmount':
        """Return a new amount of the same resource"""
        return ResourceAmount(resource_id=self.resource_id, quantity=quantity)

    def __repr__(self) -> str:
        return f"{self.quantity}x {self.resource_id}"


def amounts(pairs: Iterable[Tuple[str, int]]) -> Tuple[ResourceAmount, ...]:
    """Build a tuple of ResourceAmount from (resource_id, quantity) pairs"""
    return tuple(ResourceAmount(resource_id=rid, quantity=qty) for rid, qty in pairs)
