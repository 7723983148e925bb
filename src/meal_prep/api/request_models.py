"""Request bodies accepted by the HTTP API."""

from pydantic import BaseModel, Field

from meal_prep.domain.orders import OrderStatus


class QuantityUpdate(BaseModel):
    """New quantity for a cart entry; values below one remove it."""

    quantity: int


class CheckoutRequest(BaseModel):
    """Checkout form submission."""

    delivery_address: str = ""


class StatusUpdate(BaseModel):
    """Admin order status change."""

    status: OrderStatus


class MacroGoalUpdate(BaseModel):
    """Daily macro targets."""

    daily_calories: int = Field(ge=0)
    daily_protein: int = Field(ge=0)
    daily_carbs: int = Field(ge=0)
    daily_fats: int = Field(ge=0)
