# parking_ledger/schemas/revenue.py
from pydantic import BaseModel
from datetime import datetime
from typing import Union

from parking_ledger.services.entities import VehicleType


class RevenueOut(BaseModel):
    total: Union[int, float]
    saved_at: datetime

    class Config:
        from_attributes = True


class OccupancyOut(BaseModel):
    vehicle_type: VehicleType
    current_count: int
    max_capacity: int
    occupancy_percent: float
    is_full: bool
