"""Cart storage interface, materialization and cart operations."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol
from uuid import UUID

from meal_prep.domain.cart import CartTotals, LineItem, MaterializedCart
from meal_prep.domain.catalog import CatalogItem
from meal_prep.domain.errors import ItemUnavailableError
from meal_prep.services.catalog import CatalogService

CENTS = Decimal("0.01")


class CartStore(Protocol):
    """Client-held mapping of meal id to quantity."""

    def get(self) -> dict[UUID, int]:
        """Return the current cart entries."""

    def set(self, item_id: UUID, quantity: int) -> None:
        """Set an entry's quantity; quantities below one remove the entry."""

    def remove(self, item_id: UUID) -> None:
        """Remove an entry."""

    def clear(self) -> None:
        """Remove every entry."""


def materialize(
    entries: Mapping[UUID, int], catalog_items: Iterable[CatalogItem]
) -> MaterializedCart:
    """Join cart entries with catalog items and total them up.

    Entries with no matching catalog item produce no line item and are listed
    in ``unresolved_ids`` instead.
    """
    by_id = {item.id: item for item in catalog_items}
    items: list[LineItem] = []
    unresolved: list[UUID] = []
    price = Decimal(0)
    calories = protein = carbs = fats = 0
    for item_id, quantity in entries.items():
        catalog_item = by_id.get(item_id)
        if catalog_item is None:
            unresolved.append(item_id)
            continue
        line = LineItem(
            item_id=item_id,
            name=catalog_item.name,
            unit_price=catalog_item.price,
            quantity=quantity,
            calories=catalog_item.calories,
            protein=catalog_item.protein,
            carbs=catalog_item.carbs,
            fats=catalog_item.fats,
        )
        items.append(line)
        price += line.line_price
        calories += line.calories * quantity
        protein += line.protein * quantity
        carbs += line.carbs * quantity
        fats += line.fats * quantity
    return MaterializedCart(
        items=items,
        totals=CartTotals(
            price=price,
            calories=calories,
            protein=protein,
            carbs=carbs,
            fats=fats,
        ),
        unresolved_ids=unresolved,
    )


def round_price(value: Decimal) -> Decimal:
    """Round a price to cents for display or storage."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass
class CartService:
    """Cart operations that need the catalog."""

    catalog_service: CatalogService

    def summarize(self, store: CartStore) -> MaterializedCart:
        """Materialize the stored cart against current catalog prices."""
        entries = store.get()
        if not entries:
            return MaterializedCart()
        catalog_items = self.catalog_service.fetch_by_ids(entries.keys())
        return materialize(entries, catalog_items)

    def add_item(self, store: CartStore, item_id: UUID) -> int:
        """Add one unit of an available meal and return its new quantity."""
        if self.catalog_service.get_available(item_id) is None:
            raise ItemUnavailableError(item_id)
        quantity = store.get().get(item_id, 0) + 1
        store.set(item_id, quantity)
        return quantity

    def item_count(self, store: CartStore) -> int:
        """Return the total number of units in the cart."""
        return sum(store.get().values())
