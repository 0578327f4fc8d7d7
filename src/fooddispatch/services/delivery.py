"""Delivery time estimation from straight-line distance."""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..config import settings

DEFAULT_SPEED_KMH = 20.0
DEFAULT_BUFFER_MINUTES = 5


def estimate_minutes(
    distance_km: float,
    speed_kmh: float = DEFAULT_SPEED_KMH,
    buffer_minutes: int = DEFAULT_BUFFER_MINUTES,
) -> int:
    """Estimate delivery minutes for a distance.

    Travel time is rounded up to the next whole minute before the buffer is
    added, so a quote never under-promises because of rounding. Examples at the
    default 20 km/h and 5 minute buffer: 1 km -> 8, 2 km -> 11, 10 km -> 35.
    """

    # multiply first: 1.0 / 20 * 60 is 3.0000000000000004 in floating point
    travel_minutes = math.ceil(distance_km * 60 / speed_kmh)
    return int(travel_minutes) + buffer_minutes


@dataclass(frozen=True, slots=True)
class DeliveryEstimator:
    """Speed and buffer pair, e.g. a slower rush-hour or faster car profile."""

    speed_kmh: float = DEFAULT_SPEED_KMH
    buffer_minutes: int = DEFAULT_BUFFER_MINUTES

    @classmethod
    def from_settings(cls) -> DeliveryEstimator:
        estimator = cls(
            speed_kmh=settings.average_speed_kmh,
            buffer_minutes=settings.delivery_buffer_minutes,
        )
        estimator.validate()
        return estimator

    def validate(self) -> None:
        if self.speed_kmh <= 0:
            raise ValueError("speed_kmh must be > 0")
        if self.buffer_minutes < 0:
            raise ValueError("buffer_minutes must be >= 0")

    def estimate_minutes(self, distance_km: float) -> int:
        return estimate_minutes(distance_km, self.speed_kmh, self.buffer_minutes)
