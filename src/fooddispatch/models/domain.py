"""Domain snapshots for restaurants, riders and orders.

Every record here is an immutable point-in-time copy handed to the engines by a
snapshot provider. The engines never mutate them; state changes are proposed
back to the store instead.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional

from ..errors import PreconditionViolation


class FoodCategory(str, Enum):
    """Category tag attached to every menu offering."""

    NORTH_INDIAN = "NorthIndian"
    BIRYANI = "Biryani"
    MUGHLAI = "Mughlai"
    SOUTH_INDIAN = "SouthIndian"
    CHINESE = "Chinese"
    PIZZA = "Pizza"
    BURGER = "Burger"
    ROLLS = "Rolls"


class RiderStatus(str, Enum):
    AVAILABLE = "Available"
    BUSY = "Busy"
    OFFLINE = "Offline"


class OrderStatus(str, Enum):
    PLACED = "Placed"
    ACCEPTED = "Accepted"
    PREPARING = "Preparing"
    READY = "Ready"
    PICKED_UP = "PickedUp"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


# Lifecycle states from which a rider may be assigned.
ASSIGNABLE_ORDER_STATUSES = frozenset({OrderStatus.ACCEPTED, OrderStatus.PREPARING})


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees.

    The plain constructor does not validate; out-of-range or NaN values flow
    through the geospatial helpers unchanged. Use ``checked`` at the boundary.
    """

    latitude: float
    longitude: float

    @classmethod
    def checked(cls, latitude: float, longitude: float) -> Coordinate:
        if math.isnan(latitude) or not -90.0 <= latitude <= 90.0:
            raise PreconditionViolation(f"latitude must be within [-90, 90], got {latitude}")
        if math.isnan(longitude) or not -180.0 <= longitude <= 180.0:
            raise PreconditionViolation(f"longitude must be within [-180, 180], got {longitude}")
        return cls(latitude=float(latitude), longitude=float(longitude))

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


@dataclass(frozen=True, slots=True)
class MenuOffering:
    offering_id: str
    name: str
    price: Decimal
    category: FoodCategory
    available: bool
    prep_time_minutes: int


@dataclass(frozen=True, slots=True)
class DeliverablePlace:
    """Restaurant snapshot used by the recommendation and dispatch engines."""

    place_id: str
    name: str
    coordinate: Coordinate
    is_open: bool
    delivery_radius_km: float
    average_prep_minutes: int
    rating: float
    offerings: tuple[MenuOffering, ...] = ()
    street: Optional[str] = None
    city: Optional[str] = None

    @property
    def delivery_address(self) -> str:
        parts = [part for part in (self.street, self.city) if part]
        return ", ".join(parts)


@dataclass(frozen=True, slots=True)
class RiderSnapshot:
    rider_id: str
    name: str
    coordinate: Coordinate
    status: RiderStatus
    phone: Optional[str] = None
    vehicle_number: Optional[str] = None

    @property
    def is_available(self) -> bool:
        return self.status == RiderStatus.AVAILABLE


@dataclass(frozen=True, slots=True)
class OrderContext:
    order_id: str
    place_id: str
    destination: Coordinate
    status: OrderStatus
    rider_id: Optional[str] = None

    @property
    def is_assignable(self) -> bool:
        # an order holding a rider is never reassigned
        return self.status in ASSIGNABLE_ORDER_STATUSES and self.rider_id is None
