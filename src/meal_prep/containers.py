"""Dependency container wiring for the application."""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from uuid import UUID

from supabase import create_client

from meal_prep.adapters.json_file_scope import JsonFileScope
from meal_prep.adapters.local_cart_store import LocalCartStore
from meal_prep.adapters.supabase_admin_repository import SupabaseAdminRepository
from meal_prep.adapters.supabase_catalog_repository import SupabaseCatalogRepository
from meal_prep.adapters.supabase_identity_provider import SupabaseIdentityProvider
from meal_prep.adapters.supabase_macro_goal_repository import (
    SupabaseMacroGoalRepository,
)
from meal_prep.adapters.supabase_order_repository import SupabaseOrderRepository
from meal_prep.config import Settings
from meal_prep.services.admin import AdminOrderService
from meal_prep.services.cart import CartService, CartStore
from meal_prep.services.catalog import CatalogService
from meal_prep.services.checkout import OrderSubmissionWorkflow
from meal_prep.services.goals import MacroGoalService
from meal_prep.services.identity import IdentityProvider
from meal_prep.services.orders import OrderHistoryService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    identity_provider: IdentityProvider
    catalog_service: CatalogService
    cart_service: CartService
    cart_store_factory: Callable[[UUID], CartStore]
    checkout_workflow: OrderSubmissionWorkflow
    order_history_service: OrderHistoryService
    admin_order_service: AdminOrderService
    macro_goal_service: MacroGoalService


def file_cart_store_factory(directory: Path) -> Callable[[UUID], CartStore]:
    """Return a factory that keeps each cart in its own JSON file."""

    def factory(cart_id: UUID) -> CartStore:
        return LocalCartStore(JsonFileScope(directory / f"{cart_id}.json"))

    return factory


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    identity_provider = SupabaseIdentityProvider(supabase_client)
    catalog_service = CatalogService(SupabaseCatalogRepository(supabase_client))
    cart_service = CartService(catalog_service)
    order_repository = SupabaseOrderRepository(supabase_client)
    checkout_workflow = OrderSubmissionWorkflow(
        cart_service=cart_service,
        identity_provider=identity_provider,
        order_repository=order_repository,
        compensate_orphaned_orders=resolved_settings.compensate_orphaned_orders,
    )

    return AppContainer(
        settings=resolved_settings,
        identity_provider=identity_provider,
        catalog_service=catalog_service,
        cart_service=cart_service,
        cart_store_factory=file_cart_store_factory(
            Path(resolved_settings.cart_storage_dir)
        ),
        checkout_workflow=checkout_workflow,
        order_history_service=OrderHistoryService(order_repository),
        admin_order_service=AdminOrderService(
            SupabaseAdminRepository(supabase_client)
        ),
        macro_goal_service=MacroGoalService(
            SupabaseMacroGoalRepository(supabase_client)
        ),
    )
