"""Meal catalog read access."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from meal_prep.domain.catalog import CatalogItem


class CatalogRepository(Protocol):
    """Persistence interface for catalog reads."""

    def list_available(self) -> list[CatalogItem]:
        """Return meals flagged as available."""

    def fetch_by_ids(self, item_ids: list[UUID]) -> list[CatalogItem]:
        """Return available meals for the given ids."""


@dataclass
class CatalogService:
    """Read-only access to the meal catalog."""

    repository: CatalogRepository

    def list_available(self) -> list[CatalogItem]:
        """Return meals that can be added to a cart."""
        return self.repository.list_available()

    def fetch_by_ids(self, item_ids: Iterable[UUID]) -> list[CatalogItem]:
        """Return meals for exactly the requested ids.

        Ids without a matching available row are omitted.
        """
        unique_ids = sorted(set(item_ids), key=str)
        if not unique_ids:
            return []
        return self.repository.fetch_by_ids(unique_ids)

    def get_available(self, item_id: UUID) -> CatalogItem | None:
        """Return a single available meal, if present."""
        items = self.fetch_by_ids([item_id])
        return items[0] if items else None
