"""Supabase admin data access."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from meal_prep.adapters.supabase_errors import storage_errors
from meal_prep.adapters.supabase_order_repository import ORDER_COLUMNS, parse_order
from meal_prep.domain.orders import Order, OwnerIdentity
from meal_prep.services.admin import AdminOrderRepository


@dataclass
class SupabaseAdminRepository(AdminOrderRepository):
    """Supabase implementation for admin queries."""

    client: Client

    def list_orders(self, status: str | None) -> list[Order]:
        """Return orders ordered by creation time, newest first."""
        with storage_errors():
            query = self.client.table("orders").select(ORDER_COLUMNS)
            if status is not None:
                query = query.eq("status", status)
            response = query.order("created_at", desc=True).execute()
        return [parse_order(row) for row in response.data or []]

    def list_owners(self, user_ids: list[UUID]) -> dict[UUID, OwnerIdentity]:
        """Return profiles for the given users keyed by user id."""
        if not user_ids:
            return {}
        with storage_errors():
            response = (
                self.client.table("profiles")
                .select("id, email, full_name")
                .in_("id", [str(user_id) for user_id in user_ids])
                .execute()
            )
        return {
            UUID(row["id"]): OwnerIdentity(
                email=str(row.get("email") or "unknown"),
                full_name=row.get("full_name") or None,
            )
            for row in response.data or []
        }

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

    def update_order_status(
        self, order_id: UUID, status: str, expected_status: str
    ) -> Order | None:
        """Write the status only if the row still holds ``expected_status``."""
        with storage_errors():
            response = (
                self.client.table("orders")
                .update(
                    {"status": status, "updated_at": datetime.now(UTC).isoformat()}
                )
                .eq("id", str(order_id))
                .eq("status", expected_status)
                .execute()
            )
        if not response.data:
            return None
        return parse_order(response.data[0])
