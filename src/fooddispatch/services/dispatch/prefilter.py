"""Candidate pre-filters applied before exact rider distances are computed."""

from __future__ import annotations

import math
from typing import Any, Protocol, Sequence

from ...config import settings
from ...models.domain import Coordinate, RiderSnapshot
from ..geospatial import EARTH_RADIUS_KM, KM_PER_DEGREE_LON_AT_EQUATOR, bounding_box

# The envelope divides by 111.320 km per degree of longitude while the haversine
# sphere has ~111.195, so its edges sit just inside the nominal radius.
BOX_COVERAGE_FACTOR = (EARTH_RADIUS_KM * math.pi / 180) / KM_PER_DEGREE_LON_AT_EQUATOR * 0.999


class CandidatePrefilter(Protocol):
    """Narrows the rider pool around a centre point.

    ``covered_radius_km`` is the distance within which every rider is
    guaranteed to be kept; the engine re-scans the full pool whenever the best
    filtered rider lies beyond it.
    """

    covered_radius_km: float

    def __call__(self, center: Coordinate, riders: Sequence[RiderSnapshot]) -> Sequence[RiderSnapshot]:
        ...


class NoPrefilter:
    covered_radius_km = math.inf

    def __call__(self, center: Coordinate, riders: Sequence[RiderSnapshot]) -> Sequence[RiderSnapshot]:
        return riders


class BoundingBoxPrefilter:
    """Drop riders outside a degree envelope around the restaurant."""

    def __init__(self, radius_km: float) -> None:
        if radius_km <= 0:
            raise ValueError("radius_km must be > 0")
        self.radius_km = radius_km
        self.covered_radius_km = radius_km * BOX_COVERAGE_FACTOR

    def __call__(self, center: Coordinate, riders: Sequence[RiderSnapshot]) -> Sequence[RiderSnapshot]:
        envelope = bounding_box(center, self.radius_km)
        return [rider for rider in riders if envelope.contains(rider.coordinate)]


def get_prefilter(method: str, **kwargs: Any) -> CandidatePrefilter:
    match method:
        case "none":
            return NoPrefilter()
        case "bounding_box":
            return BoundingBoxPrefilter(kwargs.get("radius_km", settings.dispatch_prefilter_radius_km))
        case _:
            raise ValueError(f"Unknown prefilter '{method}'.")
