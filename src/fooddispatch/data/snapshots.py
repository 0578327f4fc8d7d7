"""Load restaurant, rider and order snapshots from a JSON seed document."""

from __future__ import annotations

import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Callable, Iterable, TypeVar

from ..models.domain import (
    Coordinate,
    DeliverablePlace,
    FoodCategory,
    MenuOffering,
    OrderContext,
    OrderStatus,
    RiderSnapshot,
    RiderStatus,
)
from ..persistence.memory import InMemoryDeliveryStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _coordinate(row: dict[str, Any]) -> Coordinate:
    return Coordinate.checked(float(row["latitude"]), float(row["longitude"]))


def _price(value: Any) -> Decimal:
    try:
        price = Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Unable to parse price from value '{value}'") from exc
    if price <= 0:
        raise ValueError(f"price must be > 0, got {price}")
    return price


def _flag(row: dict[str, Any], key: str, default: bool) -> bool:
    value = row.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, got {value!r}")
    return value


def parse_offering(row: dict[str, Any]) -> MenuOffering:
    return MenuOffering(
        offering_id=str(row["id"]),
        name=str(row["name"]).strip(),
        price=_price(row["price"]),
        category=FoodCategory(row["category"]),
        available=_flag(row, "available", True),
        prep_time_minutes=int(row["prep_time_minutes"]),
    )


def parse_place(row: dict[str, Any]) -> DeliverablePlace:
    radius = float(row["delivery_radius_km"])
    prep = int(row["average_prep_minutes"])
    rating = float(row.get("rating", 0.0))
    if radius <= 0:
        raise ValueError(f"delivery_radius_km must be > 0, got {radius}")
    if prep <= 0:
        raise ValueError(f"average_prep_minutes must be > 0, got {prep}")
    if not 0.0 <= rating <= 5.0:
        raise ValueError(f"rating must be within [0, 5], got {rating}")
    return DeliverablePlace(
        place_id=str(row["id"]),
        name=str(row["name"]).strip(),
        coordinate=_coordinate(row),
        is_open=_flag(row, "is_open", True),
        delivery_radius_km=radius,
        average_prep_minutes=prep,
        rating=rating,
        offerings=tuple(parse_offering(item) for item in row.get("menu", [])),
        street=(row.get("street") or "").strip() or None,
        city=(row.get("city") or "").strip() or None,
    )


def parse_rider(row: dict[str, Any]) -> RiderSnapshot:
    return RiderSnapshot(
        rider_id=str(row["id"]),
        name=str(row["name"]).strip(),
        coordinate=_coordinate(row),
        status=RiderStatus(row.get("status", RiderStatus.OFFLINE.value)),
        phone=row.get("phone"),
        vehicle_number=row.get("vehicle_number"),
    )


def parse_order(row: dict[str, Any]) -> OrderContext:
    rider_id = row.get("rider_id")
    return OrderContext(
        order_id=str(row["id"]),
        place_id=str(row["restaurant_id"]),
        destination=_coordinate(row),
        status=OrderStatus(row.get("status", OrderStatus.PLACED.value)),
        rider_id=str(rider_id) if rider_id is not None else None,
    )


def _parse_rows(kind: str, rows: Iterable[dict[str, Any]], parser: Callable[[dict[str, Any]], T]) -> list[T]:
    parsed: list[T] = []
    for row in rows:
        if not isinstance(row, dict):
            logger.warning(f"Skipping invalid {kind} row: expected an object, got {type(row).__name__}")
            continue
        try:
            parsed.append(parser(row))
        except (KeyError, ValueError, TypeError) as e:
            # Skip invalid rows but continue processing
            logger.warning(f"Skipping invalid {kind} row {row.get('id', '?')}: {e}")
    return parsed


def load_store_from_json(source: Path) -> InMemoryDeliveryStore:
    """Build an in-memory store from a JSON file with places, riders and orders."""

    if not source.exists():
        raise FileNotFoundError(f"Snapshot file not found: {source}")

    with source.open("r", encoding="utf-8") as handle:
        document = json.load(handle)
    if not isinstance(document, dict):
        raise ValueError(f"Snapshot file '{source}' must contain a JSON object.")

    places = _parse_rows("place", document.get("places", []), parse_place)
    riders = _parse_rows("rider", document.get("riders", []), parse_rider)
    orders = _parse_rows("order", document.get("orders", []), parse_order)
    logger.info(f"Loaded {len(places)} places, {len(riders)} riders and {len(orders)} orders from {source}")
    return InMemoryDeliveryStore(places=places, riders=riders, orders=orders)
