# parking_ledger/services/capacity_guard.py
"""
Admission control against the per-type limits of the price table.
Occupancy is always the sum of both populations: hourly sessions plus
subscriptions of the same vehicle type.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from parking_ledger.exceptions import CapacityError
from parking_ledger.services.entities import VehicleType
from parking_ledger.services.price_table import PriceConfig
from parking_ledger.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Admission:
    allowed: bool
    vehicle_type: VehicleType
    current_count: int
    limit: int
    reason: Optional[str] = None


def count_of_type(vehicle_type: VehicleType, *populations: Iterable) -> int:
    """Entries of one type across any number of populations (anything with a .type)."""
    return sum(1 for population in populations for entry in population if entry.type == vehicle_type)


def occupancy(hourly: Iterable, subscriptions: Iterable) -> dict:
    hourly, subscriptions = list(hourly), list(subscriptions)
    return {t: count_of_type(t, hourly, subscriptions) for t in VehicleType}


def admit(vehicle_type: VehicleType, current_count: int, prices: PriceConfig) -> Admission:
    limit = prices.limit_for(vehicle_type)
    if current_count >= limit:
        return Admission(
            allowed=False, vehicle_type=vehicle_type, current_count=current_count, limit=limit,
            reason=f"Limit reached for {vehicle_type.value}: {current_count}/{limit}",
        )
    return Admission(allowed=True, vehicle_type=vehicle_type, current_count=current_count, limit=limit)


def ensure_admitted(vehicle_type: VehicleType, current_count: int, prices: PriceConfig) -> Admission:
    """admit() that raises CapacityError on denial."""
    decision = admit(vehicle_type, current_count, prices)
    if not decision.allowed:
        logger.warning(f"[CAPACITY] {decision.reason}")
        raise CapacityError(vehicle_type, decision.current_count, decision.limit, decision.reason)
    return decision
