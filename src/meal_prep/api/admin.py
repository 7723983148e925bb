"""Admin API endpoints for order fulfillment."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from meal_prep.api.auth import require_user
from meal_prep.api.request_models import StatusUpdate  # noqa: TC001
from meal_prep.api.serializers import serialize_admin_order, serialize_order
from meal_prep.domain.errors import InvalidStatusTransitionError
from meal_prep.domain.models import UserIdentity, UserRole
from meal_prep.domain.orders import OrderStatus  # noqa: TC001

if TYPE_CHECKING:
    from meal_prep.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


async def require_admin(
    request: Request, user: UserIdentity = Depends(require_user)
) -> UserIdentity:
    """Ensure the caller holds the admin role."""
    container: AppContainer = request.app.state.container
    if not container.identity_provider.has_role(user.id, UserRole.ADMIN):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN)
    return user


@router.get("/orders", dependencies=[Depends(require_admin)])
async def list_orders(
    request: Request,
    status_filter: OrderStatus | None = Query(default=None, alias="status"),
) -> dict[str, object]:
    """Return all orders with owner details, newest first.

    The ``status`` filter only accepts known ``OrderStatus`` values and
    answers 422 otherwise. Orders stored with any other status are still
    listed when no filter is given.
    """
    container: AppContainer = request.app.state.container
    orders = container.admin_order_service.list_orders(status_filter)
    return {"orders": [serialize_admin_order(entry) for entry in orders]}


@router.patch("/orders/{order_id}", dependencies=[Depends(require_admin)])
async def update_order_status(
    order_id: UUID, body: StatusUpdate, request: Request
) -> dict[str, object]:
    """Move an order to a new fulfillment status."""
    container: AppContainer = request.app.state.container
    try:
        order = container.admin_order_service.transition_status(order_id, body.status)
    except InvalidStatusTransitionError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=str(exc)
        ) from exc
    if order is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return serialize_order(order)
