"""Supabase repository for orders and order lines."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from meal_prep.adapters.supabase_errors import (
    parse_decimal,
    parse_timestamp,
    storage_errors,
)
from meal_prep.domain.errors import StorageError
from meal_prep.domain.orders import NewOrder, NewOrderLine, Order, OrderLine
from meal_prep.services.orders import OrderRepository

ORDER_COLUMNS = (
    "id, user_id, total_price, status, delivery_address, payment_status, "
    "created_at, updated_at"
)


@dataclass
class SupabaseOrderRepository(OrderRepository):
    """Supabase implementation for order persistence."""

    client: Client

    def create_order(self, order: NewOrder) -> UUID:
        """Insert an order row and return its id."""
        with storage_errors():
            response = (
                self.client.table("orders")
                .insert(
                    {
                        "user_id": str(order.user_id),
                        "total_price": str(order.total_price),
                        "delivery_address": order.delivery_address,
                        "status": str(order.status),
                        "payment_status": str(order.payment_status),
                    }
                )
                .execute()
            )
        if not response.data:
            raise StorageError("Failed to create order")
        return UUID(response.data[0]["id"])

    def create_order_lines(self, lines: list[NewOrderLine]) -> None:
        """Insert all lines with one request."""
        payload = [
            {
                "order_id": str(line.order_id),
                "meal_id": str(line.meal_id),
                "quantity": line.quantity,
                "price_at_purchase": str(line.price_at_purchase),
            }
            for line in lines
        ]
        if not payload:
            return
        with storage_errors():
            self.client.table("order_items").insert(payload).execute()

    def delete_order(self, order_id: UUID) -> None:
        """Delete an order row."""
        with storage_errors():
            self.client.table("orders").delete().eq("id", str(order_id)).execute()

    def list_orders_for_user(self, user_id: UUID) -> list[Order]:
        """Return a user's orders, newest first."""
        with storage_errors():
            response = (
                self.client.table("orders")
                .select(ORDER_COLUMNS)
                .eq("user_id", str(user_id))
                .order("created_at", desc=True)
                .execute()
            )
        return [parse_order(row) for row in response.data or []]

    def get_order(self, order_id: UUID) -> Order | None:
        """Return an order by id."""
        with storage_errors():
            response = (
                self.client.table("orders")
                .select(ORDER_COLUMNS)
                .eq("id", str(order_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return parse_order(response.data[0])

    def list_order_lines(self, order_id: UUID) -> list[OrderLine]:
        """Return the lines of an order."""
        with storage_errors():
            response = (
                self.client.table("order_items")
                .select("id, order_id, meal_id, quantity, price_at_purchase")
                .eq("order_id", str(order_id))
                .order("created_at", desc=False)
                .execute()
            )
        return [_parse_line(row) for row in response.data or []]


def parse_order(row: dict[str, object]) -> Order:
    """Build an ``Order`` from an ``orders`` row."""
    return Order(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        total_price=parse_decimal(row.get("total_price")),
        status=str(row.get("status", "")),
        delivery_address=str(row.get("delivery_address", "")),
        payment_status=str(row.get("payment_status", "")),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        updated_at=parse_timestamp(row.get("updated_at")),
    )


def _parse_line(row: dict[str, object]) -> OrderLine:
    return OrderLine(
        id=UUID(row["id"]),
        order_id=UUID(row["order_id"]),
        meal_id=UUID(row["meal_id"]),
        quantity=int(row.get("quantity", 0)),
        price_at_purchase=parse_decimal(row.get("price_at_purchase")),
    )
