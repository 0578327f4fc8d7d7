"""Geospatial helper functions."""

from __future__ import annotations

import math
from dataclasses import dataclass

from shapely.geometry import MultiPolygon, Point, Polygon, box

from ..models.domain import Coordinate

EARTH_RADIUS_KM = 6371.0

# Approximate kilometres per degree, used only for bounding-box envelopes.
KM_PER_DEGREE_LAT = 110.574
KM_PER_DEGREE_LON_AT_EQUATOR = 111.320


def to_radians(degrees: float) -> float:
    return degrees * math.pi / 180


def to_degrees(radians: float) -> float:
    return radians * 180 / math.pi


def haversine_km(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    *,
    radius_km: float = EARTH_RADIUS_KM,
) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = to_radians(lat1), to_radians(lat2)
    d_phi = to_radians(lat2 - lat1)
    d_lambda = to_radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return radius_km * c


def distance_km(a: Coordinate, b: Coordinate, *, radius_km: float = EARTH_RADIUS_KM) -> float:
    """Straight-line great-circle distance between two coordinates.

    Inputs are not range-checked; NaN coordinates yield NaN. Road networks are
    not modelled.
    """

    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude, radius_km=radius_km)


def is_within_radius(center: Coordinate, target: Coordinate, radius_km: float) -> bool:
    return distance_km(center, target) <= radius_km


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Degree envelope around a centre point. Advisory only.

    Longitudes are kept unwrapped, so ``min_lon`` may drop below -180 and
    ``max_lon`` may pass 180 when the envelope crosses the antimeridian.
    """

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    def to_polygon(self) -> Polygon | MultiPolygon:
        if self.min_lon < -180:
            return MultiPolygon(
                [
                    box(-180, self.min_lat, self.max_lon, self.max_lat),
                    box(self.min_lon + 360, self.min_lat, 180, self.max_lat),
                ]
            )
        if self.max_lon > 180:
            return MultiPolygon(
                [
                    box(self.min_lon, self.min_lat, 180, self.max_lat),
                    box(-180, self.min_lat, self.max_lon - 360, self.max_lat),
                ]
            )
        return box(self.min_lon, self.min_lat, self.max_lon, self.max_lat)

    def contains(self, coordinate: Coordinate) -> bool:
        # covers() keeps points that sit exactly on the edge
        return self.to_polygon().covers(Point(coordinate.longitude, coordinate.latitude))


def bounding_box(center: Coordinate, radius_km: float) -> BoundingBox:
    """Approximate min/max lat/lon envelope for pre-filtering.

    Longitude spans ``radius_km / (111.320 * cos(lat))`` degrees for small
    radii; the spherical ``asin(sin(r) / cos(lat))`` form keeps the envelope
    wide enough at high latitudes. Once the radius reaches a pole every
    longitude is included. Anything inside the box must still be checked with
    ``distance_km``.
    """

    lat_offset = radius_km / KM_PER_DEGREE_LAT
    min_lat = max(center.latitude - lat_offset, -90.0)
    max_lat = min(center.latitude + lat_offset, 90.0)

    angular = to_radians(radius_km / KM_PER_DEGREE_LON_AT_EQUATOR)
    cos_lat = math.cos(to_radians(center.latitude))
    if abs(center.latitude) + lat_offset >= 90 or math.sin(angular) >= cos_lat:
        return BoundingBox(min_lat=min_lat, max_lat=max_lat, min_lon=-180.0, max_lon=180.0)

    lon_offset = to_degrees(math.asin(math.sin(angular) / cos_lat))
    return BoundingBox(
        min_lat=min_lat,
        max_lat=max_lat,
        min_lon=center.longitude - lon_offset,
        max_lon=center.longitude + lon_offset,
    )
