"""Pydantic models for rider assignment decisions."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.domain import OrderStatus, RiderStatus


class AssignmentInstruction(BaseModel):
    """State change proposed to the store; applied only through an atomic commit."""

    model_config = ConfigDict(frozen=True)

    order_id: str
    rider_id: str
    expected_order_status: OrderStatus
    new_order_status: OrderStatus = OrderStatus.PREPARING
    expected_rider_status: RiderStatus = RiderStatus.AVAILABLE
    new_rider_status: RiderStatus = RiderStatus.BUSY


class AssignmentResult(BaseModel):
    order_id: str
    status: OrderStatus
    rider_id: str
    rider_name: str
    rider_phone: Optional[str] = None
    vehicle_number: Optional[str] = None
    distance_to_restaurant_km: float = Field(..., description="Rounded to 2 decimals.")
    pickup_eta_minutes: int
    message: str = ""
