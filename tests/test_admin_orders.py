"""Tests for the admin order view."""

from dataclasses import replace
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from meal_prep.domain.errors import InvalidStatusTransitionError
from meal_prep.domain.orders import Order, OrderStatus, OwnerIdentity
from meal_prep.services.admin import AdminOrderService, can_transition
from tests.conftest import InMemoryOrderStore

BASE_TIME = datetime(2025, 10, 23, 12, 0, tzinfo=UTC)


def _add_order(
    store: InMemoryOrderStore,
    minutes: int,
    status: str = "pending",
    user_id: UUID | None = None,
) -> Order:
    order = Order(
        id=uuid4(),
        user_id=user_id or uuid4(),
        total_price=Decimal("18.90"),
        status=status,
        delivery_address="somewhere",
        payment_status="pending",
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )
    store.orders[order.id] = order
    return order


def test_list_orders_newest_first() -> None:
    store = InMemoryOrderStore()
    for minutes in (5, 60, -30, 12, 0):
        _add_order(store, minutes)
    service = AdminOrderService(store)

    listed = service.list_orders()

    created = [entry.order.created_at for entry in listed]
    assert created == sorted(created, reverse=True)
    assert len(set(created)) == 5


def test_list_orders_joins_owner_identity() -> None:
    store = InMemoryOrderStore()
    known_user = uuid4()
    store.owners[known_user] = OwnerIdentity(email="ana@example.com", full_name="Ana")
    _add_order(store, 1, user_id=known_user)
    _add_order(store, 0)
    service = AdminOrderService(store)

    listed = service.list_orders()

    assert listed[0].owner == OwnerIdentity(email="ana@example.com", full_name="Ana")
    assert listed[1].owner == OwnerIdentity(email="unknown", full_name=None)


def test_list_orders_filters_by_status() -> None:
    store = InMemoryOrderStore()
    _add_order(store, 0, status="pending")
    completed = _add_order(store, 1, status="completed")
    service = AdminOrderService(store)

    listed = service.list_orders(OrderStatus.COMPLETED)

    assert [entry.order.id for entry in listed] == [completed.id]


@pytest.mark.parametrize(
    ("current", "requested"),
    [
        ("pending", OrderStatus.PROCESSING),
        ("pending", OrderStatus.COMPLETED),
        ("processing", OrderStatus.COMPLETED),
    ],
)
def test_allowed_transitions_are_written(current: str, requested: OrderStatus) -> None:
    store = InMemoryOrderStore()
    order = _add_order(store, 0, status=current)
    service = AdminOrderService(store)

    updated = service.transition_status(order.id, requested)

    assert updated is not None
    assert updated.status == str(requested)
    assert store.orders[order.id].status == str(requested)


@pytest.mark.parametrize(
    ("current", "requested"),
    [
        ("completed", OrderStatus.PENDING),
        ("completed", OrderStatus.PROCESSING),
        ("processing", OrderStatus.PENDING),
        ("pending", OrderStatus.PENDING),
        ("cancelled", OrderStatus.COMPLETED),
    ],
)
def test_disallowed_transitions_raise(current: str, requested: OrderStatus) -> None:
    store = InMemoryOrderStore()
    order = _add_order(store, 0, status=current)
    service = AdminOrderService(store)

    with pytest.raises(InvalidStatusTransitionError):
        service.transition_status(order.id, requested)

    assert store.orders[order.id].status == current


def test_transition_unknown_order_returns_none() -> None:
    service = AdminOrderService(InMemoryOrderStore())

    assert service.transition_status(uuid4(), OrderStatus.COMPLETED) is None


def test_can_transition_tolerates_unknown_status() -> None:
    assert not can_transition("on_hold", OrderStatus.PROCESSING)
    assert can_transition("pending", OrderStatus.PROCESSING)


class ConcurrentlyCompletedStore(InMemoryOrderStore):
    """Another admin completes the order right after it is read."""

    def get_order(self, order_id: UUID) -> Order | None:
        order = super().get_order(order_id)
        if order is not None and order.status != "completed":
            self.orders[order_id] = replace(order, status="completed")
        return order


def test_transition_rejects_status_changed_after_read() -> None:
    store = ConcurrentlyCompletedStore()
    order = _add_order(store, 0, status="pending")
    service = AdminOrderService(store)

    with pytest.raises(InvalidStatusTransitionError):
        service.transition_status(order.id, OrderStatus.PROCESSING)

    assert store.orders[order.id].status == "completed"
