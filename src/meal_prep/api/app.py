"""FastAPI application factory."""

import logging
from uuid import UUID, uuid4

from fastapi import Depends, FastAPI, Header, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse

from meal_prep.api.admin import router as admin_router
from meal_prep.api.auth import bearer_token, require_user
from meal_prep.api.request_models import (
    CheckoutRequest,
    MacroGoalUpdate,
    QuantityUpdate,
)
from meal_prep.api.serializers import (
    serialize_cart,
    serialize_goals,
    serialize_meal,
    serialize_order,
    serialize_order_detail,
    serialize_submission,
)
from meal_prep.app_logging import configure_logging
from meal_prep.containers import AppContainer
from meal_prep.domain.errors import ItemUnavailableError, StorageError
from meal_prep.domain.goals import MacroGoal
from meal_prep.domain.models import UserIdentity
from meal_prep.services.cart import CartStore
from meal_prep.services.checkout import SubmissionOutcome

CART_COOKIE_MAX_AGE = 60 * 60 * 24 * 30

_CHECKOUT_STATUS = {
    SubmissionOutcome.SUCCESS: status.HTTP_201_CREATED,
    SubmissionOutcome.REJECTED_INPUT: status.HTTP_422_UNPROCESSABLE_ENTITY,
    SubmissionOutcome.AUTH_REQUIRED: status.HTTP_401_UNAUTHORIZED,
    SubmissionOutcome.PARTIAL_FAILURE: status.HTTP_502_BAD_GATEWAY,
}


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
        logger.warning("Storage request failed", extra={"path": request.url.path})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/meals")
    async def list_meals(request: Request) -> dict[str, object]:
        """Return the meals that can be ordered."""
        state_container: AppContainer = request.app.state.container
        meals = state_container.catalog_service.list_available()
        return {"meals": [serialize_meal(meal) for meal in meals]}

    @app.get("/cart")
    async def get_cart(
        request: Request, cart_store: CartStore = Depends(_cart_store)
    ) -> dict[str, object]:
        """Return the cart priced against the current catalog."""
        return _cart_payload(request.app.state.container, cart_store)

    @app.post("/cart/items/{meal_id}")
    async def add_cart_item(
        meal_id: UUID, request: Request, cart_store: CartStore = Depends(_cart_store)
    ) -> dict[str, object]:
        """Add one unit of a meal to the cart."""
        state_container: AppContainer = request.app.state.container
        try:
            state_container.cart_service.add_item(cart_store, meal_id)
        except ItemUnavailableError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc
        return _cart_payload(state_container, cart_store)

    @app.put("/cart/items/{meal_id}")
    async def set_cart_item(
        meal_id: UUID,
        body: QuantityUpdate,
        request: Request,
        cart_store: CartStore = Depends(_cart_store),
    ) -> dict[str, object]:
        """Set a cart entry's quantity; zero or less removes it."""
        cart_store.set(meal_id, body.quantity)
        return _cart_payload(request.app.state.container, cart_store)

    @app.delete("/cart/items/{meal_id}")
    async def remove_cart_item(
        meal_id: UUID, request: Request, cart_store: CartStore = Depends(_cart_store)
    ) -> dict[str, object]:
        """Remove a meal from the cart."""
        cart_store.remove(meal_id)
        return _cart_payload(request.app.state.container, cart_store)

    @app.delete("/cart")
    async def clear_cart(
        request: Request, cart_store: CartStore = Depends(_cart_store)
    ) -> dict[str, object]:
        """Empty the cart."""
        cart_store.clear()
        return _cart_payload(request.app.state.container, cart_store)

    @app.post("/checkout")
    async def checkout(
        body: CheckoutRequest,
        request: Request,
        response: Response,
        authorization: str | None = Header(default=None),
        cart_store: CartStore = Depends(_cart_store),
    ) -> dict[str, object]:
        """Place an order for the current cart."""
        state_container: AppContainer = request.app.state.container
        result = state_container.checkout_workflow.submit(
            cart_store,
            delivery_address=body.delivery_address,
            access_token=bearer_token(authorization),
        )
        response.status_code = _CHECKOUT_STATUS[result.outcome]
        return serialize_submission(result)

    @app.get("/orders")
    async def list_orders(
        request: Request, user: UserIdentity = Depends(require_user)
    ) -> dict[str, object]:
        """Return the caller's order history."""
        state_container: AppContainer = request.app.state.container
        orders = state_container.order_history_service.list_orders(user.id)
        return {"orders": [serialize_order(order) for order in orders]}

    @app.get("/orders/{order_id}")
    async def order_detail(
        order_id: UUID, request: Request, user: UserIdentity = Depends(require_user)
    ) -> dict[str, object]:
        """Return one of the caller's orders with its lines."""
        state_container: AppContainer = request.app.state.container
        detail = state_container.order_history_service.get_order(user.id, order_id)
        if detail is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return serialize_order_detail(detail)

    @app.get("/goals")
    async def get_goals(
        request: Request, user: UserIdentity = Depends(require_user)
    ) -> dict[str, object]:
        """Return the caller's daily macro goals."""
        state_container: AppContainer = request.app.state.container
        return serialize_goals(state_container.macro_goal_service.get_goals(user.id))

    @app.put("/goals")
    async def update_goals(
        body: MacroGoalUpdate,
        request: Request,
        user: UserIdentity = Depends(require_user),
    ) -> dict[str, object]:
        """Replace the caller's daily macro goals."""
        state_container: AppContainer = request.app.state.container
        goals = state_container.macro_goal_service.update_goals(
            user.id, MacroGoal(**body.model_dump())
        )
        return serialize_goals(goals)

    return app


def _cart_store(request: Request, response: Response) -> CartStore:
    """Return the cart for the caller's cart cookie, issuing one if needed."""
    container: AppContainer = request.app.state.container
    cookie_name = container.settings.cart_cookie_name
    cart_id = _parse_cart_id(request.cookies.get(cookie_name))
    if cart_id is None:
        cart_id = uuid4()
        response.set_cookie(
            cookie_name,
            str(cart_id),
            max_age=CART_COOKIE_MAX_AGE,
            httponly=True,
            samesite="lax",
        )
    return container.cart_store_factory(cart_id)


def _parse_cart_id(raw: str | None) -> UUID | None:
    if not raw:
        return None
    try:
        return UUID(raw)
    except ValueError:
        return None


def _cart_payload(container: AppContainer, cart_store: CartStore) -> dict[str, object]:
    cart = container.cart_service.summarize(cart_store)
    return serialize_cart(cart, container.cart_service.item_count(cart_store))
