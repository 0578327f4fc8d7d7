"""Named failure kinds raised by the dispatch and recommendation engines."""

from __future__ import annotations

from typing import Any


class DispatchError(Exception):
    """Base class for engine failures the caller is expected to handle."""

    retryable: bool = False


class NotFoundError(DispatchError):
    """A referenced restaurant, order or rider is missing from the snapshot provider."""

    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity.capitalize()} with ID {entity_id} not found")


class NoCapacityError(DispatchError):
    """No rider was Available when the decision was made."""

    retryable = True

    def __init__(self, order_id: Any, message: str | None = None):
        self.order_id = order_id
        super().__init__(message or "No riders available at the moment. Please try again later.")


class InvalidStateError(DispatchError):
    """The order is not in a lifecycle state that allows the requested operation."""

    def __init__(self, order_id: Any, status: Any, message: str | None = None):
        self.order_id = order_id
        self.status = status
        super().__init__(
            message
            or f"Cannot assign rider to order {order_id} with status '{status}'. "
            f"Order must be 'Accepted' or 'Preparing'."
        )


class PreconditionViolation(ValueError):
    """Malformed caller input, such as an out-of-range coordinate."""
