"""Cart store persisted in a local key/value scope."""

import json
import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from meal_prep.services.cart import CartStore

logger = logging.getLogger(__name__)

CART_KEY = "cart"


class KeyValueScope(Protocol):
    """String key/value storage that outlives the process."""

    def get_item(self, key: str) -> str | None:
        """Return the stored value for a key."""

    def set_item(self, key: str, value: str) -> None:
        """Store a value under a key."""

    def remove_item(self, key: str) -> None:
        """Delete a key."""


@dataclass
class LocalCartStore(CartStore):
    """Cart kept as a JSON object of meal id to quantity under ``"cart"``."""

    scope: KeyValueScope

    def get(self) -> dict[UUID, int]:
        """Return valid entries; malformed stored data reads as empty."""
        raw = self.scope.get_item(CART_KEY)
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding unreadable cart data")
            return {}
        if not isinstance(data, dict):
            return {}
        entries: dict[UUID, int] = {}
        for key, quantity in data.items():
            try:
                item_id = UUID(key)
            except ValueError:
                continue
            if isinstance(quantity, int) and not isinstance(quantity, bool):
                if quantity >= 1:
                    entries[item_id] = quantity
        return entries

    def set(self, item_id: UUID, quantity: int) -> None:
        """Set a quantity; anything below one removes the entry."""
        if quantity < 1:
            self.remove(item_id)
            return
        entries = self.get()
        entries[item_id] = quantity
        self._save(entries)

    def remove(self, item_id: UUID) -> None:
        """Remove an entry if present."""
        entries = self.get()
        if entries.pop(item_id, None) is not None:
            self._save(entries)

    def clear(self) -> None:
        """Drop the whole cart."""
        self.scope.remove_item(CART_KEY)

    def _save(self, entries: dict[UUID, int]) -> None:
        payload = {str(item_id): quantity for item_id, quantity in entries.items()}
        self.scope.set_item(CART_KEY, json.dumps(payload))
