# parking_ledger/services/ledger_views.py
"""
Derived views over ledger state: list filtering, available actions for the
plate currently typed, occupancy summary. Pure functions, no stored flags.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from parking_ledger.services.entities import VehicleType
from parking_ledger.services.plate_parser import is_complete_plate
from parking_ledger.services.price_table import PriceConfig


@dataclass(frozen=True)
class HourlyActions:
    can_register: bool
    can_bill: bool


@dataclass(frozen=True)
class SubscriptionActions:
    can_register: bool
    can_remove: bool
    can_renew: bool


def filter_by_plate(entries: Iterable, query: Optional[str]) -> List:
    """Case-insensitive substring match on plate. Empty query keeps everything."""
    needle = (query or "").strip().lower()
    entries = list(entries)
    if not needle:
        return entries
    return [e for e in entries if needle in e.plate.lower()]


def hourly_actions(plate: str, sessions: Iterable) -> HourlyActions:
    if not is_complete_plate(plate):
        return HourlyActions(can_register=False, can_bill=False)
    exists = any(s.plate == plate for s in sessions)
    return HourlyActions(can_register=not exists, can_bill=exists)


def subscription_actions(plate: str, holder_name: Optional[str], duration: Optional[int],
                         subscriptions: Iterable) -> SubscriptionActions:
    if not is_complete_plate(plate):
        return SubscriptionActions(can_register=False, can_remove=False, can_renew=False)
    exists = any(s.plate == plate for s in subscriptions)
    has_duration = bool(duration)
    return SubscriptionActions(
        can_register=not exists and bool((holder_name or "").strip()) and has_duration,
        can_remove=exists,
        can_renew=exists and has_duration,
    )


def occupancy_summary(counts: dict, prices: PriceConfig) -> List[dict]:
    summary = []
    for vehicle_type in VehicleType:
        current, limit = counts.get(vehicle_type, 0), prices.limit_for(vehicle_type)
        summary.append({
            "vehicle_type": vehicle_type,
            "current_count": current,
            "max_capacity": limit,
            "occupancy_percent": round(current / limit * 100, 1) if limit else 0,
            "is_full": current >= limit,
        })
    return summary
