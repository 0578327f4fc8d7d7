"""Pydantic query/result models for restaurant recommendations."""

from __future__ import annotations

from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from ..models.domain import Coordinate, FoodCategory


class CoordinateModel(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)

    def to_domain(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)


class RecommendationQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    location: CoordinateModel = Field(..., description="Requester location.")
    category: FoodCategory = Field(..., description="Desired food category.")
    max_time_minutes: int = Field(
        default=60,
        ge=10,
        le=180,
        description="Maximum acceptable preparation plus delivery time.",
    )

    @property
    def coordinate(self) -> Coordinate:
        return self.location.to_domain()


class RecommendedOffering(BaseModel):
    offering_id: str
    name: str
    price: Decimal
    category: FoodCategory
    prep_time_minutes: int
    available: bool


class RecommendationResult(BaseModel):
    place_id: str
    name: str
    rating: float
    distance_km: float = Field(..., description="Straight-line distance, rounded to 2 decimals.")
    total_estimated_time_minutes: int
    delivery_address: str = ""
    offerings: List[RecommendedOffering]
