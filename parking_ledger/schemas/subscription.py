# parking_ledger/schemas/subscription.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, Union

from parking_ledger.services.entities import TimeUnit, VehicleType


class SubscriptionCreate(BaseModel):
    plate: str
    holder_name: str = Field(min_length=1, max_length=200)      # trimmed to 20 by the ledger
    national_id: Optional[str] = Field(default=None, max_length=50)  # separators stripped by the ledger
    duration: int = Field(gt=0, le=999)
    unit: TimeUnit = TimeUnit.MONTHS


class SubscriptionRenew(BaseModel):
    duration: int = Field(gt=0, le=999)
    unit: TimeUnit = TimeUnit.MONTHS
    paid: bool                         # False: new charge accumulates on the balance


class SubscriptionOut(BaseModel):
    plate: str
    type: VehicleType
    holder_name: str
    national_id: str
    duration: int
    expiry_timestamp: datetime
    formatted_expiry: str
    amount_due: Union[int, float]

    class Config:
        from_attributes = True


class SubscriptionActionsOut(BaseModel):
    plate: str
    can_register: bool
    can_remove: bool
    can_renew: bool
