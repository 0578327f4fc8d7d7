"""In-process reference store with compare-and-swap assignment commits."""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Iterable, Optional, Sequence

from ..models.domain import (
    Coordinate,
    DeliverablePlace,
    OrderContext,
    OrderStatus,
    RiderSnapshot,
)
from ..schemas.dispatch import AssignmentInstruction

logger = logging.getLogger(__name__)


class InMemoryDeliveryStore:
    """Thread-safe store holding the latest snapshot of every entity.

    Reads return the immutable snapshot objects themselves, so a caller's view
    never changes underneath it. Writes replace snapshots under a single lock.
    """

    def __init__(
        self,
        places: Iterable[DeliverablePlace] = (),
        riders: Iterable[RiderSnapshot] = (),
        orders: Iterable[OrderContext] = (),
    ) -> None:
        self._lock = threading.Lock()
        # dicts keep insertion order, which the dispatch tie-break relies on
        self._places = {place.place_id: place for place in places}
        self._riders = {rider.rider_id: rider for rider in riders}
        self._orders = {order.order_id: order for order in orders}

    # snapshot provider

    def get_order(self, order_id: str) -> Optional[OrderContext]:
        with self._lock:
            return self._orders.get(order_id)

    def get_place(self, place_id: str) -> Optional[DeliverablePlace]:
        with self._lock:
            return self._places.get(place_id)

    def get_rider(self, rider_id: str) -> Optional[RiderSnapshot]:
        with self._lock:
            return self._riders.get(rider_id)

    def list_places(self, *, open_only: bool = False) -> Sequence[DeliverablePlace]:
        with self._lock:
            places = list(self._places.values())
        if open_only:
            return [place for place in places if place.is_open]
        return places

    def list_riders(self, *, available_only: bool = False) -> Sequence[RiderSnapshot]:
        with self._lock:
            riders = list(self._riders.values())
        if available_only:
            return [rider for rider in riders if rider.is_available]
        return riders

    def list_orders(self) -> Sequence[OrderContext]:
        with self._lock:
            return list(self._orders.values())

    # writes

    def upsert_place(self, place: DeliverablePlace) -> None:
        with self._lock:
            self._places[place.place_id] = place

    def upsert_rider(self, rider: RiderSnapshot) -> None:
        with self._lock:
            self._riders[rider.rider_id] = rider

    def upsert_order(self, order: OrderContext) -> None:
        with self._lock:
            self._orders[order.order_id] = order

    def update_rider_location(self, rider_id: str, coordinate: Coordinate) -> bool:
        with self._lock:
            rider = self._riders.get(rider_id)
            if rider is None:
                return False
            self._riders[rider_id] = replace(rider, coordinate=coordinate)
            return True

    def transition_order(self, order_id: str, expected: OrderStatus, new: OrderStatus) -> bool:
        with self._lock:
            order = self._orders.get(order_id)
            if order is None or order.status != expected:
                return False
            self._orders[order_id] = replace(order, status=new)
            return True

    def commit_assignment(self, instruction: AssignmentInstruction) -> bool:
        with self._lock:
            order = self._orders.get(instruction.order_id)
            rider = self._riders.get(instruction.rider_id)
            if order is None or rider is None:
                logger.warning(
                    f"Rejected assignment of rider {instruction.rider_id} to order {instruction.order_id}: "
                    f"unknown order or rider"
                )
                return False
            if rider.status != instruction.expected_rider_status:
                return False
            if order.status != instruction.expected_order_status or order.rider_id is not None:
                return False

            self._riders[rider.rider_id] = replace(rider, status=instruction.new_rider_status)
            self._orders[order.order_id] = replace(
                order,
                status=instruction.new_order_status,
                rider_id=rider.rider_id,
            )
            return True
