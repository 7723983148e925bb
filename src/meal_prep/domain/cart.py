"""Domain models for materialized carts."""

from dataclasses import dataclass, field
from decimal import Decimal
from uuid import UUID


@dataclass(frozen=True)
class LineItem:
    """A cart entry joined with the catalog item it refers to."""

    item_id: UUID
    name: str
    unit_price: Decimal
    quantity: int
    calories: int
    protein: int
    carbs: int
    fats: int

    @property
    def line_price(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class CartTotals:
    """Aggregate price and macros across line items."""

    price: Decimal = Decimal(0)
    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fats: int = 0


@dataclass(frozen=True)
class MaterializedCart:
    """Priced line items, their totals and ids that did not resolve."""

    items: list[LineItem] = field(default_factory=list)
    totals: CartTotals = field(default_factory=CartTotals)
    unresolved_ids: list[UUID] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.items
