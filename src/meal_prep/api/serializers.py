"""JSON shapes returned by the HTTP API."""

from meal_prep.domain.cart import CartTotals, LineItem, MaterializedCart
from meal_prep.domain.catalog import CatalogItem
from meal_prep.domain.goals import MacroGoal
from meal_prep.domain.orders import AdminOrder, Order, OrderDetail, OrderLine
from meal_prep.services.cart import round_price
from meal_prep.services.checkout import SubmissionResult


def serialize_meal(item: CatalogItem) -> dict[str, object]:
    return {
        "id": str(item.id),
        "name": item.name,
        "description": item.description,
        "calories": item.calories,
        "protein": item.protein,
        "carbs": item.carbs,
        "fats": item.fats,
        "price": str(round_price(item.price)),
        "image_url": item.image_url,
    }


def serialize_cart(cart: MaterializedCart, item_count: int) -> dict[str, object]:
    return {
        "items": [_serialize_line(item) for item in cart.items],
        "totals": _serialize_totals(cart.totals),
        "unresolved_ids": [str(item_id) for item_id in cart.unresolved_ids],
        "item_count": item_count,
    }


def serialize_submission(result: SubmissionResult) -> dict[str, object]:
    return {
        "outcome": str(result.outcome),
        "states": [str(state) for state in result.states],
        "reasons": [str(reason) for reason in result.reasons],
        "order_id": str(result.order_id) if result.order_id else None,
        "order_committed": result.order_committed,
        "failed_stage": str(result.failed_stage) if result.failed_stage else None,
        "error": result.error,
        "compensated": result.compensated,
        "unresolved_ids": [str(item_id) for item_id in result.unresolved_ids],
        "totals": _serialize_totals(result.cart.totals),
    }


def serialize_order(order: Order) -> dict[str, object]:
    return {
        "id": str(order.id),
        "user_id": str(order.user_id),
        "total_price": str(round_price(order.total_price)),
        "status": order.status,
        "delivery_address": order.delivery_address,
        "payment_status": order.payment_status,
        "created_at": order.created_at.isoformat() if order.created_at else None,
        "updated_at": order.updated_at.isoformat() if order.updated_at else None,
    }


def serialize_order_detail(detail: OrderDetail) -> dict[str, object]:
    payload = serialize_order(detail.order)
    payload["lines"] = [_serialize_order_line(line) for line in detail.lines]
    return payload


def serialize_admin_order(entry: AdminOrder) -> dict[str, object]:
    payload = serialize_order(entry.order)
    payload["owner"] = {"email": entry.owner.email, "full_name": entry.owner.full_name}
    return payload


def serialize_goals(goals: MacroGoal) -> dict[str, object]:
    return {
        "daily_calories": goals.daily_calories,
        "daily_protein": goals.daily_protein,
        "daily_carbs": goals.daily_carbs,
        "daily_fats": goals.daily_fats,
    }


def _serialize_line(item: LineItem) -> dict[str, object]:
    return {
        "meal_id": str(item.item_id),
        "name": item.name,
        "unit_price": str(round_price(item.unit_price)),
        "quantity": item.quantity,
        "line_price": str(round_price(item.line_price)),
        "calories": item.calories,
        "protein": item.protein,
        "carbs": item.carbs,
        "fats": item.fats,
    }


def _serialize_totals(totals: CartTotals) -> dict[str, object]:
    return {
        "price": str(round_price(totals.price)),
        "calories": totals.calories,
        "protein": totals.protein,
        "carbs": totals.carbs,
        "fats": totals.fats,
    }


def _serialize_order_line(line: OrderLine) -> dict[str, object]:
    return {
        "id": str(line.id),
        "meal_id": str(line.meal_id),
        "quantity": line.quantity,
        "price_at_purchase": str(round_price(line.price_at_purchase)),
    }
