"""Dispatch and matching engine for a food-delivery backend."""

from .errors import DispatchError, InvalidStateError, NoCapacityError, NotFoundError, PreconditionViolation
from .models.domain import (
    Coordinate,
    DeliverablePlace,
    FoodCategory,
    MenuOffering,
    OrderContext,
    OrderStatus,
    RiderSnapshot,
    RiderStatus,
)
from .schemas.dispatch import AssignmentInstruction, AssignmentResult
from .schemas.recommendation import RecommendationQuery, RecommendationResult
from .services.delivery import DeliveryEstimator, estimate_minutes
from .services.dispatch import DispatchEngine, DispatchService
from .services.geospatial import bounding_box, distance_km
from .services.recommendation import RecommendationEngine, recommend

__all__ = [
    "Coordinate",
    "DeliverablePlace",
    "FoodCategory",
    "MenuOffering",
    "OrderContext",
    "OrderStatus",
    "RiderSnapshot",
    "RiderStatus",
    "RecommendationQuery",
    "RecommendationResult",
    "AssignmentInstruction",
    "AssignmentResult",
    "DeliveryEstimator",
    "estimate_minutes",
    "distance_km",
    "bounding_box",
    "RecommendationEngine",
    "recommend",
    "DispatchEngine",
    "DispatchService",
    "DispatchError",
    "NotFoundError",
    "NoCapacityError",
    "InvalidStateError",
    "PreconditionViolation",
]
