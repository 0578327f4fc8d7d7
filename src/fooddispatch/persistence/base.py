"""Contracts for the order/rider/restaurant store the engines read from and commit to."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..models.domain import DeliverablePlace, OrderContext, OrderStatus, RiderSnapshot
from ..schemas.dispatch import AssignmentInstruction


class SnapshotProvider(Protocol):
    """Read access to current snapshots.

    ``open_only`` / ``available_only`` are optimisations; the engines filter
    again and behave identically on unfiltered collections.
    """

    def get_order(self, order_id: str) -> Optional[OrderContext]:
        ...

    def get_place(self, place_id: str) -> Optional[DeliverablePlace]:
        ...

    def list_places(self, *, open_only: bool = False) -> Sequence[DeliverablePlace]:
        ...

    def list_riders(self, *, available_only: bool = False) -> Sequence[RiderSnapshot]:
        ...


class AssignmentCommitter(Protocol):
    def commit_assignment(self, instruction: AssignmentInstruction) -> bool:
        """Apply the rider and order transitions as one conditional update.

        Returns False, changing nothing, when the rider is no longer in the
        expected state or the order has moved on.
        """
        ...

    def transition_order(self, order_id: str, expected: OrderStatus, new: OrderStatus) -> bool:
        ...


class DeliveryStore(SnapshotProvider, AssignmentCommitter, Protocol):
    """Both halves of the store, as consumed by the dispatch service."""
