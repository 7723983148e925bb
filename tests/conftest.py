"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal
from pathlib import Path
from uuid import UUID, uuid4

import pytest

from meal_prep.adapters.local_cart_store import KeyValueScope, LocalCartStore
from meal_prep.config import Settings
from meal_prep.containers import AppContainer
from meal_prep.domain.catalog import CatalogItem
from meal_prep.domain.errors import StorageError
from meal_prep.domain.goals import MacroGoal
from meal_prep.domain.models import UserIdentity, UserRole
from meal_prep.domain.orders import (
    NewOrder,
    NewOrderLine,
    Order,
    OrderLine,
    OwnerIdentity,
)
from meal_prep.services.admin import AdminOrderRepository, AdminOrderService
from meal_prep.services.cart import CartService, CartStore
from meal_prep.services.catalog import CatalogRepository, CatalogService
from meal_prep.services.checkout import OrderSubmissionWorkflow
from meal_prep.services.goals import MacroGoalRepository, MacroGoalService
from meal_prep.services.identity import IdentityProvider
from meal_prep.services.orders import OrderHistoryService, OrderRepository

USER_TOKEN = "user-token"
ADMIN_TOKEN = "admin-token"


def make_meal(  # noqa: PLR0913
    name: str = "grilled chicken bowl",
    price: str = "18.90",
    calories: int = 450,
    protein: int = 45,
    carbs: int = 40,
    fats: int = 12,
    is_available: bool = True,
) -> CatalogItem:
    return CatalogItem(
        id=uuid4(),
        name=name,
        description=None,
        calories=calories,
        protein=protein,
        carbs=carbs,
        fats=fats,
        price=Decimal(price),
        is_available=is_available,
    )


@dataclass
class InMemoryScope(KeyValueScope):
    """In-memory key/value scope for tests."""

    items: dict[str, str] = field(default_factory=dict)

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


@dataclass
class InMemoryCatalogRepository(CatalogRepository):
    """In-memory catalog for tests."""

    meals: dict[UUID, CatalogItem] = field(default_factory=dict)
    fetches: list[list[UUID]] = field(default_factory=list)

    def add(self, meal: CatalogItem) -> CatalogItem:
        self.meals[meal.id] = meal
        return meal

    def list_available(self) -> list[CatalogItem]:
        return [meal for meal in self.meals.values() if meal.is_available]

    def fetch_by_ids(self, item_ids: list[UUID]) -> list[CatalogItem]:
        self.fetches.append(item_ids)
        return [
            self.meals[item_id]
            for item_id in item_ids
            if item_id in self.meals and self.meals[item_id].is_available
        ]


@dataclass
class InMemoryOrderStore(OrderRepository, AdminOrderRepository):
    """In-memory orders and order lines shared by user and admin views."""

    orders: dict[UUID, Order] = field(default_factory=dict)
    lines: list[OrderLine] = field(default_factory=list)
    owners: dict[UUID, OwnerIdentity] = field(default_factory=dict)
    fail_order_insert: str | None = None
    fail_lines_insert: str | None = None
    fail_delete: str | None = None
    writes: list[str] = field(default_factory=list)

    def create_order(self, order: NewOrder) -> UUID:
        if self.fail_order_insert:
            raise StorageError(self.fail_order_insert)
        self.writes.append("orders")
        order_id = uuid4()
        self.orders[order_id] = Order(
            id=order_id,
            user_id=order.user_id,
            total_price=order.total_price,
            status=str(order.status),
            delivery_address=order.delivery_address,
            payment_status=str(order.payment_status),
            created_at=datetime.now(tz=UTC),
        )
        return order_id

    def create_order_lines(self, lines: list[NewOrderLine]) -> None:
        if self.fail_lines_insert:
            raise StorageError(self.fail_lines_insert)
        self.writes.append("order_items")
        for line in lines:
            self.lines.append(
                OrderLine(
                    id=uuid4(),
                    order_id=line.order_id,
                    meal_id=line.meal_id,
                    quantity=line.quantity,
                    price_at_purchase=line.price_at_purchase,
                )
            )

    def delete_order(self, order_id: UUID) -> None:
        if self.fail_delete:
            raise StorageError(self.fail_delete)
        self.writes.append("delete")
        self.orders.pop(order_id, None)

    def list_orders_for_user(self, user_id: UUID) -> list[Order]:
        return [order for order in self.orders.values() if order.user_id == user_id]

    def get_order(self, order_id: UUID) -> Order | None:
        return self.orders.get(order_id)

    def list_order_lines(self, order_id: UUID) -> list[OrderLine]:
        return [line for line in self.lines if line.order_id == order_id]

    def list_orders(self, status: str | None) -> list[Order]:
        return [
            order
            for order in self.orders.values()
            if status is None or order.status == status
        ]

    def list_owners(self, user_ids: list[UUID]) -> dict[UUID, OwnerIdentity]:
        return {
            user_id: self.owners[user_id]
            for user_id in user_ids
            if user_id in self.owners
        }

    def update_order_status(
        self, order_id: UUID, status: str, expected_status: str
    ) -> Order | None:
        current = self.orders.get(order_id)
        if current is None or current.status != expected_status:
            return None
        updated = Order(
            id=current.id,
            user_id=current.user_id,
            total_price=current.total_price,
            status=status,
            delivery_address=current.delivery_address,
            payment_status=current.payment_status,
            created_at=current.created_at,
            updated_at=datetime.now(tz=UTC),
        )
        self.orders[order_id] = updated
        return updated


@dataclass
class FakeIdentityProvider(IdentityProvider):
    """Token table backed identity provider."""

    users: dict[str, UserIdentity] = field(default_factory=dict)
    roles: set[tuple[UUID, UserRole]] = field(default_factory=set)

    def add_user(self, token: str, *, admin: bool = False) -> UserIdentity:
        user = UserIdentity(id=uuid4(), email=f"{token}@example.com")
        self.users[token] = user
        self.roles.add((user.id, UserRole.USER))
        if admin:
            self.roles.add((user.id, UserRole.ADMIN))
        return user

    def get_current_user(self, access_token: str | None) -> UserIdentity | None:
        if access_token is None:
            return None
        return self.users.get(access_token)

    def has_role(self, user_id: UUID, role: UserRole) -> bool:
        return (user_id, role) in self.roles


@dataclass
class InMemoryMacroGoalRepository(MacroGoalRepository):
    """In-memory macro goals for tests."""

    goals: dict[UUID, MacroGoal] = field(default_factory=dict)

    def get_goals(self, user_id: UUID) -> MacroGoal | None:
        return self.goals.get(user_id)

    def upsert_goals(self, user_id: UUID, goals: MacroGoal) -> None:
        self.goals[user_id] = goals


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        cart_storage_dir=str(tmp_path / "carts"),
    )


@pytest.fixture
def catalog_repository() -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository()


@pytest.fixture
def order_store() -> InMemoryOrderStore:
    return InMemoryOrderStore()


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
def cart_store() -> LocalCartStore:
    return LocalCartStore(InMemoryScope())


@pytest.fixture
def cart_service(catalog_repository: InMemoryCatalogRepository) -> CartService:
    return CartService(CatalogService(catalog_repository))


@pytest.fixture
def workflow(
    cart_service: CartService,
    identity_provider: FakeIdentityProvider,
    order_store: InMemoryOrderStore,
) -> OrderSubmissionWorkflow:
    return OrderSubmissionWorkflow(
        cart_service=cart_service,
        identity_provider=identity_provider,
        order_repository=order_store,
    )


@pytest.fixture
def container(
    settings: Settings,
    catalog_repository: InMemoryCatalogRepository,
    order_store: InMemoryOrderStore,
    identity_provider: FakeIdentityProvider,
    cart_service: CartService,
    workflow: OrderSubmissionWorkflow,
) -> AppContainer:
    carts: dict[UUID, InMemoryScope] = {}

    def cart_store_factory(cart_id: UUID) -> CartStore:
        return LocalCartStore(carts.setdefault(cart_id, InMemoryScope()))

    return AppContainer(
        settings=settings,
        identity_provider=identity_provider,
        catalog_service=cart_service.catalog_service,
        cart_service=cart_service,
        cart_store_factory=cart_store_factory,
        checkout_workflow=workflow,
        order_history_service=OrderHistoryService(order_store),
        admin_order_service=AdminOrderService(order_store),
        macro_goal_service=MacroGoalService(InMemoryMacroGoalRepository()),
    )
