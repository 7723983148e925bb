"""Order submission workflow.

Placing an order is two dependent writes: the order row, then one batched
insert of its lines. The storage backend applies each write atomically but
the pair is not wrapped in a transaction, so a failure of the second write
leaves an order without lines. That case is reported as a partial failure
with ``order_committed`` set; it is never hidden behind a silent rollback.
"""

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from uuid import UUID

from meal_prep.domain.cart import MaterializedCart
from meal_prep.domain.errors import StorageError
from meal_prep.domain.orders import NewOrder, NewOrderLine
from meal_prep.services.cart import CartService, CartStore, round_price
from meal_prep.services.identity import IdentityProvider
from meal_prep.services.orders import OrderRepository

logger = logging.getLogger(__name__)


class WorkflowState(StrEnum):
    """States a submission passes through."""

    IDLE = "idle"
    VALIDATING = "validating"
    CREATING_ORDER = "creating_order"
    CREATING_LINES = "creating_lines"
    SETTLED = "settled"


class SubmissionOutcome(StrEnum):
    """How a submission settled."""

    SUCCESS = "success"
    PARTIAL_FAILURE = "partial_failure"
    REJECTED_INPUT = "rejected_input"
    AUTH_REQUIRED = "auth_required"


class RejectionReason(StrEnum):
    """Caller-correctable input problems."""

    MISSING_ADDRESS = "missing_address"
    EMPTY_CART = "empty_cart"


@dataclass(frozen=True)
class SubmissionResult:
    """Result of a single checkout submission."""

    outcome: SubmissionOutcome
    states: tuple[WorkflowState, ...]
    cart: MaterializedCart
    reasons: tuple[RejectionReason, ...] = ()
    order_id: UUID | None = None
    failed_stage: WorkflowState | None = None
    error: str | None = None
    compensated: bool = False

    @property
    def order_committed(self) -> bool:
        """True when an order row exists in storage after this submission."""
        return self.order_id is not None and not self.compensated

    @property
    def unresolved_ids(self) -> list[UUID]:
        return self.cart.unresolved_ids


@dataclass
class _Run:
    cart: MaterializedCart = field(default_factory=MaterializedCart)
    states: list[WorkflowState] = field(default_factory=lambda: [WorkflowState.IDLE])

    def enter(self, state: WorkflowState) -> None:
        self.states.append(state)

    def settle(self, outcome: SubmissionOutcome, **details: object) -> SubmissionResult:
        self.states.append(WorkflowState.SETTLED)
        return SubmissionResult(
            outcome=outcome,
            states=tuple(self.states),
            cart=self.cart,
            **details,
        )


@dataclass
class OrderSubmissionWorkflow:
    """Turns the stored cart into a persisted order."""

    cart_service: CartService
    identity_provider: IdentityProvider
    order_repository: OrderRepository
    compensate_orphaned_orders: bool = False

    def submit(
        self,
        cart_store: CartStore,
        delivery_address: str,
        access_token: str | None,
    ) -> SubmissionResult:
        """Validate the checkout input and write the order and its lines.

        Prices come from the materialization done here, so the order total and
        each line's ``price_at_purchase`` reflect catalog prices at submission
        time. The cart is cleared only when both writes succeed.
        """
        run = _Run()
        run.enter(WorkflowState.VALIDATING)
        run.cart = self.cart_service.summarize(cart_store)
        if run.cart.unresolved_ids:
            logger.warning(
                "Cart contains meals that are no longer available",
                extra={"unresolved_ids": [str(i) for i in run.cart.unresolved_ids]},
            )

        reasons = _validate(delivery_address, run.cart)
        if reasons:
            return run.settle(SubmissionOutcome.REJECTED_INPUT, reasons=reasons)

        user = self.identity_provider.get_current_user(access_token)
        if user is None:
            return run.settle(SubmissionOutcome.AUTH_REQUIRED)

        run.enter(WorkflowState.CREATING_ORDER)
        try:
            order_id = self.order_repository.create_order(
                NewOrder(
                    user_id=user.id,
                    total_price=round_price(run.cart.totals.price),
                    delivery_address=delivery_address,
                )
            )
        except StorageError as exc:
            logger.warning(
                "Failed to create order", extra={"user_id": str(user.id)}
            )
            return run.settle(
                SubmissionOutcome.PARTIAL_FAILURE,
                failed_stage=WorkflowState.CREATING_ORDER,
                error=str(exc),
            )

        run.enter(WorkflowState.CREATING_LINES)
        lines = [
            NewOrderLine(
                order_id=order_id,
                meal_id=item.item_id,
                quantity=item.quantity,
                price_at_purchase=item.unit_price,
            )
            for item in run.cart.items
        ]
        try:
            self.order_repository.create_order_lines(lines)
        except StorageError as exc:
            logger.error(
                "Order created without lines",
                extra={"order_id": str(order_id), "user_id": str(user.id)},
            )
            return run.settle(
                SubmissionOutcome.PARTIAL_FAILURE,
                failed_stage=WorkflowState.CREATING_LINES,
                order_id=order_id,
                error=str(exc),
                compensated=self._compensate(order_id),
            )

        cart_store.clear()
        logger.info(
            "Order placed",
            extra={
                "order_id": str(order_id),
                "user_id": str(user.id),
                "line_count": len(lines),
            },
        )
        return run.settle(SubmissionOutcome.SUCCESS, order_id=order_id)

    def _compensate(self, order_id: UUID) -> bool:
        if not self.compensate_orphaned_orders:
            return False
        try:
            self.order_repository.delete_order(order_id)
        except StorageError:
            logger.exception(
                "Failed to delete orphaned order", extra={"order_id": str(order_id)}
            )
            return False
        logger.info("Deleted orphaned order", extra={"order_id": str(order_id)})
        return True


def _validate(
    delivery_address: str, cart: MaterializedCart
) -> tuple[RejectionReason, ...]:
    reasons: list[RejectionReason] = []
    if not delivery_address.strip():
        reasons.append(RejectionReason.MISSING_ADDRESS)
    if cart.is_empty:
        reasons.append(RejectionReason.EMPTY_CART)
    return tuple(reasons)
