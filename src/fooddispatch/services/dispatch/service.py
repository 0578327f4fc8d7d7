"""High-level orchestration for order acceptance and rider assignment."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ...config import settings
from ...errors import InvalidStateError, NotFoundError
from ...models.domain import OrderContext, OrderStatus
from ...persistence.base import DeliveryStore
from .engine import DispatchEngine
from .outcomes import Assigned, DispatchOutcome, InvalidState, NoCapacity, NotFound

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AcceptanceResult:
    order: OrderContext
    assignment: DispatchOutcome

    @property
    def rider_assigned(self) -> bool:
        return isinstance(self.assignment, Assigned)


class DispatchService:
    """Runs the engine against a store and commits its decisions atomically.

    Two dispatches racing for the same rider can both select it; the store's
    conditional commit lets only one win. The loser re-runs selection on a
    fresh rider snapshot with the contested rider excluded.
    """

    def __init__(
        self,
        store: DeliveryStore,
        engine: Optional[DispatchEngine] = None,
        *,
        max_attempts: Optional[int] = None,
    ) -> None:
        self.store = store
        self.engine = engine or DispatchEngine()
        self.max_attempts = settings.max_assignment_attempts if max_attempts is None else max_attempts
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

    def assign_nearest_rider(self, order_id: str) -> DispatchOutcome:
        logger.info(f"Assigning nearest rider to order {order_id}")
        order = self.store.get_order(order_id)
        if order is None:
            return NotFound(entity="order", entity_id=order_id)

        place = self.store.get_place(order.place_id)
        lost: set[str] = set()

        for attempt in range(1, self.max_attempts + 1):
            riders = self.store.list_riders(available_only=True)
            outcome = self.engine.assign(order, place, riders, exclude=lost)
            if not isinstance(outcome, Assigned):
                if isinstance(outcome, NoCapacity):
                    logger.warning(f"No riders available for order {order_id}")
                return outcome

            if self.store.commit_assignment(outcome.instruction):
                result = outcome.result
                logger.info(
                    f"Selected rider {result.rider_id} ({result.rider_name}) for order {order_id}. "
                    f"Distance: {result.distance_to_restaurant_km:.2f} km"
                )
                return outcome

            rider_id = outcome.instruction.rider_id
            logger.warning(
                f"Rider {rider_id} was taken before order {order_id} could be committed "
                f"(attempt {attempt}/{self.max_attempts})"
            )

            current = self.store.get_order(order_id)
            if current is None:
                return NotFound(entity="order", entity_id=order_id)
            if current.status != order.status or current.rider_id is not None:
                logger.warning(f"Order {order_id} changed to {current.status.value} during assignment")
                return InvalidState(order_id=order_id, status=current.status)
            lost.add(rider_id)

        return NoCapacity(
            order_id=order_id,
            reason=f"Riders kept being taken by concurrent assignments after {self.max_attempts} attempts.",
        )

    def accept_order(self, order_id: str) -> AcceptanceResult:
        """Move a Placed order to Accepted, then try to assign a rider.

        A failed assignment leaves the order Accepted so it can be retried.
        """

        logger.info(f"Restaurant accepting order {order_id}")
        order = self.store.get_order(order_id)
        if order is None:
            raise NotFoundError("order", order_id)
        if order.status != OrderStatus.PLACED:
            raise InvalidStateError(
                order_id,
                order.status.value,
                f"Cannot accept order with status '{order.status.value}'. Only 'Placed' orders can be accepted.",
            )
        if not self.store.transition_order(order_id, OrderStatus.PLACED, OrderStatus.ACCEPTED):
            current = self.store.get_order(order_id)
            status = current.status.value if current else "missing"
            raise InvalidStateError(order_id, status, f"Order {order_id} changed to '{status}' while being accepted.")

        logger.info(f"Order {order_id} accepted. Attempting to assign nearest rider...")
        assignment = self.assign_nearest_rider(order_id)
        if not isinstance(assignment, Assigned):
            logger.warning(f"Failed to auto-assign rider to order {order_id}: {type(assignment).__name__}")

        return AcceptanceResult(order=self.store.get_order(order_id), assignment=assignment)
