"""Nearest-available-rider selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, Optional, Sequence

from ...config import settings
from ...models.domain import DeliverablePlace, OrderContext, OrderStatus, RiderSnapshot
from ...schemas.dispatch import AssignmentInstruction, AssignmentResult
from ..delivery import DeliveryEstimator
from ..geospatial import distance_km
from .outcomes import Assigned, DispatchOutcome, InvalidState, NoCapacity, NotFound
from .prefilter import CandidatePrefilter, get_prefilter


@dataclass(frozen=True, slots=True)
class RiderDistance:
    rider: RiderSnapshot
    distance_km: float


class DispatchEngine:
    """Pick the closest Available rider to a restaurant.

    The engine is a pure computation over the snapshots it is given. It returns
    the decision together with the state change the store must commit; it never
    changes rider or order state itself.

    Tie-break policy: when two riders are equally close, the one that appears
    first in the input sequence wins.
    """

    def __init__(
        self,
        estimator: Optional[DeliveryEstimator] = None,
        prefilter: Optional[CandidatePrefilter] = None,
        *,
        earth_radius_km: Optional[float] = None,
    ) -> None:
        self.estimator = estimator or DeliveryEstimator.from_settings()
        self.prefilter = prefilter or get_prefilter(settings.dispatch_prefilter)
        self.earth_radius_km = earth_radius_km or settings.earth_radius_km

    def available_riders(
        self,
        riders: Sequence[RiderSnapshot],
        exclude: Collection[str] = (),
    ) -> list[RiderSnapshot]:
        return [rider for rider in riders if rider.is_available and rider.rider_id not in exclude]

    def _measure(self, place: DeliverablePlace, riders: Sequence[RiderSnapshot]) -> list[RiderDistance]:
        return [
            RiderDistance(
                rider=rider,
                distance_km=distance_km(rider.coordinate, place.coordinate, radius_km=self.earth_radius_km),
            )
            for rider in riders
        ]

    def rank_riders(
        self,
        place: DeliverablePlace,
        riders: Sequence[RiderSnapshot],
        exclude: Collection[str] = (),
    ) -> list[RiderDistance]:
        """All Available riders ordered nearest first, input order kept on ties."""

        return sorted(
            self._measure(place, self.available_riders(riders, exclude)),
            key=lambda item: item.distance_km,
        )

    def nearest(
        self,
        place: DeliverablePlace,
        riders: Sequence[RiderSnapshot],
        exclude: Collection[str] = (),
    ) -> Optional[RiderDistance]:
        available = self.available_riders(riders, exclude)
        if not available:
            return None

        best = self._closest(place, self.prefilter(place.coordinate, available))
        if best is None or best.distance_km > self.prefilter.covered_radius_km:
            # the prefilter may have dropped a closer rider; scan everyone
            best = self._closest(place, available)
        return best

    def _closest(self, place: DeliverablePlace, riders: Sequence[RiderSnapshot]) -> Optional[RiderDistance]:
        best: Optional[RiderDistance] = None
        for measured in self._measure(place, riders):
            # strict comparison keeps the first rider on equal distance
            if best is None or measured.distance_km < best.distance_km:
                best = measured
        return best

    def assign(
        self,
        order: OrderContext,
        place: Optional[DeliverablePlace],
        riders: Sequence[RiderSnapshot],
        *,
        exclude: Collection[str] = (),
    ) -> DispatchOutcome:
        if not order.is_assignable:
            return InvalidState(order_id=order.order_id, status=order.status)
        if place is None or place.place_id != order.place_id:
            return NotFound(entity="restaurant", entity_id=order.place_id)

        selected = self.nearest(place, riders, exclude)
        if selected is None:
            return NoCapacity(order_id=order.order_id)

        rider = selected.rider
        pickup_eta = self.estimator.estimate_minutes(selected.distance_km)
        result = AssignmentResult(
            order_id=order.order_id,
            status=OrderStatus.PREPARING,
            rider_id=rider.rider_id,
            rider_name=rider.name,
            rider_phone=rider.phone,
            vehicle_number=rider.vehicle_number,
            distance_to_restaurant_km=round(selected.distance_km, 2),
            pickup_eta_minutes=pickup_eta,
            message=f"Rider {rider.name} assigned successfully. ETA to restaurant: {pickup_eta} minutes",
        )
        instruction = AssignmentInstruction(
            order_id=order.order_id,
            rider_id=rider.rider_id,
            expected_order_status=order.status,
        )
        return Assigned(result=result, instruction=instruction)
