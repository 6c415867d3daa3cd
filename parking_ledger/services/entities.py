# parking_ledger/services/entities.py
"""
Ledger entities and their storage documents.
HourlySession and Subscription are keyed by plate; RevenueTotal is a single
running amount. to_dict/from_dict produce the JSON shapes kept in storage.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Union

from parking_ledger.utils.date_format import from_iso, to_iso

Amount = Union[int, float]

NO_NATIONAL_ID = "none"


class VehicleType(str, Enum):
    CAR = "car"
    MOTORCYCLE = "motorcycle"


class TimeUnit(str, Enum):
    MONTHS = "months"
    WEEKS = "weeks"


@dataclass
class HourlySession:
    plate: str
    type: VehicleType
    entry_timestamp: datetime

    def to_dict(self) -> dict:
        return {
            "plate": self.plate,
            "type": self.type.value,
            "entryTimestamp": to_iso(self.entry_timestamp),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HourlySession":
        return cls(
            plate=data["plate"],
            type=VehicleType(data["type"]),
            entry_timestamp=from_iso(data["entryTimestamp"]),
        )


@dataclass
class Subscription:
    plate: str
    type: VehicleType
    holder_name: str
    national_id: str                # digits, or NO_NATIONAL_ID
    duration: int                   # cumulative, display only
    expiry_timestamp: datetime
    formatted_expiry: str
    amount_due: Amount

    def to_dict(self) -> dict:
        return {
            "plate": self.plate,
            "type": self.type.value,
            "holderName": self.holder_name,
            "nationalId": self.national_id,
            "duration": self.duration,
            "expiryTimestamp": to_iso(self.expiry_timestamp),
            "formattedExpiry": self.formatted_expiry,
            "amountDue": self.amount_due,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Subscription":
        return cls(
            plate=data["plate"],
            type=VehicleType(data["type"]),
            holder_name=data["holderName"],
            national_id=data.get("nationalId") or NO_NATIONAL_ID,
            duration=int(data["duration"]),
            expiry_timestamp=from_iso(data["expiryTimestamp"]),
            formatted_expiry=data.get("formattedExpiry", ""),
            amount_due=data["amountDue"],
        )


@dataclass
class RevenueTotal:
    total: Amount
    saved_at: datetime

    def to_dict(self) -> dict:
        return {"total": self.total, "savedAt": to_iso(self.saved_at)}

    @classmethod
    def from_dict(cls, data: dict) -> "RevenueTotal":
        return cls(total=data.get("total", 0), saved_at=from_iso(data["savedAt"]))


@dataclass
class BillingReceipt:
    """Result of billing an hourly session, consumed by the receipt printer."""
    plate: str
    type: VehicleType
    entry_timestamp: datetime
    exit_timestamp: datetime
    elapsed_hours: int
    charge: Amount
