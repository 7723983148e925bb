"""Domain models for the meal catalog."""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID


@dataclass(frozen=True)
class CatalogItem:
    """A meal offered in the catalog."""

    id: UUID
    name: str
    description: str | None
    calories: int
    protein: int
    carbs: int
    fats: int
    price: Decimal
    is_available: bool = True
    image_url: str | None = None
