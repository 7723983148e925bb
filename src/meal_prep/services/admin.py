"""Admin service for order fulfillment."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from meal_prep.domain.errors import InvalidStatusTransitionError
from meal_prep.domain.orders import (
    ALLOWED_TRANSITIONS,
    UNKNOWN_OWNER,
    AdminOrder,
    Order,
    OrderStatus,
    OwnerIdentity,
)

logger = logging.getLogger(__name__)


class AdminOrderRepository(Protocol):
    """Persistence interface for admin order queries."""

    def list_orders(self, status: str | None) -> list[Order]:
        """Return orders, newest first, optionally filtered by status."""

    def list_owners(self, user_ids: list[UUID]) -> dict[UUID, OwnerIdentity]:
        """Return profile data for the given users."""

    def get_order(self, order_id: UUID) -> Order | None:
        """Return an order by id."""

    def update_order_status(
        self, order_id: UUID, status: str, expected_status: str
    ) -> Order | None:
        """Write a new status if the order still has ``expected_status``.

        Returns ``None`` when no row matched.
        """


@dataclass
class AdminOrderService:
    """Order listing and status changes for admins."""

    repository: AdminOrderRepository

    def list_orders(self, status: OrderStatus | None = None) -> list[AdminOrder]:
        """Return orders joined with owner profiles, newest first."""
        orders = self.repository.list_orders(str(status) if status else None)
        owners = self.repository.list_owners(
            list(dict.fromkeys(order.user_id for order in orders))
        )
        ordered = sorted(orders, key=lambda order: order.created_at, reverse=True)
        return [
            AdminOrder(order=order, owner=owners.get(order.user_id, UNKNOWN_OWNER))
            for order in ordered
        ]

    def transition_status(
        self, order_id: UUID, new_status: OrderStatus
    ) -> Order | None:
        """Move an order to a new status if the transition is allowed."""
        order = self.repository.get_order(order_id)
        if order is None:
            return None
        if not can_transition(order.status, new_status):
            raise InvalidStatusTransitionError(order.status, str(new_status))
        updated = self.repository.update_order_status(
            order_id, str(new_status), expected_status=order.status
        )
        if updated is None:
            current = self.repository.get_order(order_id)
            if current is None:
                return None
            raise InvalidStatusTransitionError(current.status, str(new_status))
        logger.info(
            "Order status changed",
            extra={
                "order_id": str(order_id),
                "from_status": order.status,
                "to_status": str(new_status),
            },
        )
        return updated


def can_transition(current: str, requested: OrderStatus) -> bool:
    """Return True when ``current`` may move to ``requested``."""
    try:
        current_status = OrderStatus(current)
    except ValueError:
        return False
    return requested in ALLOWED_TRANSITIONS[current_status]
