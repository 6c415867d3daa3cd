# parking_ledger/schemas/hourly.py
from pydantic import BaseModel
from datetime import datetime
from typing import Union

from parking_ledger.services.entities import VehicleType


class HourlyCreate(BaseModel):
    plate: str


class HourlySessionOut(BaseModel):
    plate: str
    type: VehicleType
    entry_timestamp: datetime

    class Config:
        from_attributes = True


class BillingReceiptOut(BaseModel):
    plate: str
    type: VehicleType
    entry_timestamp: datetime
    exit_timestamp: datetime
    elapsed_hours: int
    charge: Union[int, float]

    class Config:
        from_attributes = True


class HourlyActionsOut(BaseModel):
    plate: str
    can_register: bool
    can_bill: bool
