"""Supabase repository for the meal catalog."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from meal_prep.adapters.supabase_errors import parse_decimal, storage_errors
from meal_prep.domain.catalog import CatalogItem
from meal_prep.services.catalog import CatalogRepository

_COLUMNS = (
    "id, name, description, calories, protein, carbs, fats, price, image_url, "
    "is_available"
)


@dataclass
class SupabaseCatalogRepository(CatalogRepository):
    """Supabase implementation for catalog reads."""

    client: Client

    def list_available(self) -> list[CatalogItem]:
        """Return available meals ordered by name."""
        with storage_errors():
            response = (
                self.client.table("meals")
                .select(_COLUMNS)
                .eq("is_available", True)
                .order("name", desc=False)
                .execute()
            )
        return [_parse_item(row) for row in response.data or []]

    def fetch_by_ids(self, item_ids: list[UUID]) -> list[CatalogItem]:
        """Return available meals matching the ids."""
        with storage_errors():
            response = (
                self.client.table("meals")
                .select(_COLUMNS)
                .in_("id", [str(item_id) for item_id in item_ids])
                .eq("is_available", True)
                .execute()
            )
        return [_parse_item(row) for row in response.data or []]


def _parse_item(row: dict[str, object]) -> CatalogItem:
    return CatalogItem(
        id=UUID(row["id"]),
        name=str(row.get("name", "")),
        description=row.get("description"),
        calories=int(row.get("calories", 0)),
        protein=int(row.get("protein", 0)),
        carbs=int(row.get("carbs", 0)),
        fats=int(row.get("fats", 0)),
        price=parse_decimal(row.get("price")),
        is_available=bool(row.get("is_available", True)),
        image_url=row.get("image_url"),
    )
