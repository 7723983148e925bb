"""Order persistence interface and order history."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from meal_prep.domain.orders import (
    NewOrder,
    NewOrderLine,
    Order,
    OrderDetail,
    OrderLine,
)


class OrderRepository(Protocol):
    """Persistence interface for orders and their lines."""

    def create_order(self, order: NewOrder) -> UUID:
        """Insert an order row and return its id."""

    def create_order_lines(self, lines: list[NewOrderLine]) -> None:
        """Insert all order lines in a single write."""

    def delete_order(self, order_id: UUID) -> None:
        """Delete an order row."""

    def list_orders_for_user(self, user_id: UUID) -> list[Order]:
        """Return a user's orders, newest first."""

    def get_order(self, order_id: UUID) -> Order | None:
        """Return an order by id."""

    def list_order_lines(self, order_id: UUID) -> list[OrderLine]:
        """Return the lines of an order."""


@dataclass
class OrderHistoryService:
    """A user's view of their own orders."""

    repository: OrderRepository

    def list_orders(self, user_id: UUID) -> list[Order]:
        """Return the user's orders, newest first."""
        orders = self.repository.list_orders_for_user(user_id)
        return sorted(orders, key=lambda order: order.created_at, reverse=True)

    def get_order(self, user_id: UUID, order_id: UUID) -> OrderDetail | None:
        """Return an order with its lines when it belongs to the user."""
        order = self.repository.get_order(order_id)
        if order is None or order.user_id != user_id:
            return None
        lines = self.repository.list_order_lines(order_id)
        return OrderDetail(order=order, lines=lines)
