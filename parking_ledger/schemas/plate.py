# parking_ledger/schemas/plate.py
from pydantic import BaseModel
from typing import Optional

from parking_ledger.services.entities import VehicleType


class PlateKeystroke(BaseModel):
    previous: str = ""
    text: str


class PlateOut(BaseModel):
    plate: str
    is_complete: bool
    vehicle_type: Optional[VehicleType] = None   # only for complete plates
