"""Domain models for orders."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import StrEnum
from uuid import UUID


class OrderStatus(StrEnum):
    """Known fulfillment states of an order."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"


class PaymentStatus(StrEnum):
    """Known payment states of an order."""

    PENDING = "pending"
    PAID = "paid"


ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PROCESSING, OrderStatus.COMPLETED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.COMPLETED}),
    OrderStatus.COMPLETED: frozenset(),
}


@dataclass(frozen=True)
class NewOrder:
    """Order row to be inserted at checkout."""

    user_id: UUID
    total_price: Decimal
    delivery_address: str
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING


@dataclass(frozen=True)
class NewOrderLine:
    """Order line row to be inserted at checkout."""

    order_id: UUID
    meal_id: UUID
    quantity: int
    price_at_purchase: Decimal


@dataclass(frozen=True)
class Order:
    """Persisted order.

    ``status`` and ``payment_status`` are kept as raw strings since rows may
    hold values outside the known enumerations.
    """

    id: UUID
    user_id: UUID
    total_price: Decimal
    status: str
    delivery_address: str
    payment_status: str
    created_at: datetime
    updated_at: datetime | None = None


@dataclass(frozen=True)
class OrderLine:
    """Persisted order line."""

    id: UUID
    order_id: UUID
    meal_id: UUID
    quantity: int
    price_at_purchase: Decimal


@dataclass(frozen=True)
class OrderDetail:
    """Order with its lines."""

    order: Order
    lines: list[OrderLine]


@dataclass(frozen=True)
class OwnerIdentity:
    """Profile data shown next to an order."""

    email: str
    full_name: str | None


UNKNOWN_OWNER = OwnerIdentity(email="unknown", full_name=None)


@dataclass(frozen=True)
class AdminOrder:
    """Order joined with its owner's identity."""

    order: Order
    owner: OwnerIdentity
