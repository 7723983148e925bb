"""Domain errors."""

from uuid import UUID


class StorageError(RuntimeError):
    """A read or write was rejected by the storage backend."""


class ItemUnavailableError(LookupError):
    """The catalog item does not exist or is not available."""

    def __init__(self, item_id: UUID) -> None:
        super().__init__(f"Meal {item_id} is not available")
        self.item_id = item_id


class InvalidStatusTransitionError(ValueError):
    """The requested order status change is not allowed."""

    def __init__(self, current: str, requested: str) -> None:
        super().__init__(f"Cannot change order status from {current} to {requested}")
        self.current = current
        self.requested = requested
