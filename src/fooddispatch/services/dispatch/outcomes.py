"""Tagged outcomes returned by the dispatch engine.

Running out of riders is a normal business event, so the engine reports it as a
value instead of raising. ``unwrap`` converts any failure into the matching
exception for callers that prefer to let it propagate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from ...errors import InvalidStateError, NoCapacityError, NotFoundError
from ...models.domain import OrderStatus
from ...schemas.dispatch import AssignmentInstruction, AssignmentResult


@dataclass(frozen=True, slots=True)
class Assigned:
    result: AssignmentResult
    instruction: AssignmentInstruction

    ok = True
    retryable = False

    def unwrap(self) -> AssignmentResult:
        return self.result


@dataclass(frozen=True, slots=True)
class NoCapacity:
    order_id: Any
    reason: str = "No riders available at the moment. Please try again later."

    ok = False
    retryable = True

    def unwrap(self) -> AssignmentResult:
        raise NoCapacityError(self.order_id, self.reason)


@dataclass(frozen=True, slots=True)
class NotFound:
    entity: str
    entity_id: Any

    ok = False
    retryable = False

    def unwrap(self) -> AssignmentResult:
        raise NotFoundError(self.entity, self.entity_id)


@dataclass(frozen=True, slots=True)
class InvalidState:
    order_id: Any
    status: OrderStatus

    ok = False
    retryable = False

    def unwrap(self) -> AssignmentResult:
        raise InvalidStateError(self.order_id, self.status.value)


DispatchOutcome = Union[Assigned, NoCapacity, NotFound, InvalidState]
