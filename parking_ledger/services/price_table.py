# parking_ledger/services/price_table.py
"""
PriceConfig: capacity limits and rates per vehicle type.
Pure data + lookup. Stored as numeric-string text under the Spanish keys
the operators' devices have always used.
"""

import re
from dataclasses import dataclass, asdict
from typing import Mapping

from parking_ledger.exceptions import ValidationError
from parking_ledger.services.entities import Amount, TimeUnit, VehicleType

WEEKS_PER_MONTH = 4

# storage key -> PriceConfig attribute
STORAGE_FIELDS = {
    "maxMotos": "max_motorcycles",
    "maxCarros": "max_cars",
    "precioHoraMotos": "hourly_motorcycle_rate",
    "precioHoraCarros": "hourly_car_rate",
    "precioMesMotos": "monthly_motorcycle_rate",
    "precioMesCarros": "monthly_car_rate",
}


def as_amount(value: float) -> Amount:
    """Keep integral amounts as int; fractional weekly amounts stay float."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _parse_field(key: str, raw, strip_non_digits: bool) -> int:
    if isinstance(raw, bool):
        raise ValidationError(f"'{key}' must be a non-negative integer")
    if isinstance(raw, int):
        if raw < 0:
            raise ValidationError(f"'{key}' must be a non-negative integer")
        return raw
    text = str(raw if raw is not None else "").strip()
    if strip_non_digits:
        text = re.sub(r"[^0-9]", "", text)
    if not text.isdigit():
        raise ValidationError(f"'{key}' must be a non-negative integer, got {raw!r}")
    return int(text)


@dataclass(frozen=True)
class PriceConfig:
    max_motorcycles: int
    max_cars: int
    hourly_motorcycle_rate: int
    hourly_car_rate: int
    monthly_motorcycle_rate: int
    monthly_car_rate: int

    def limit_for(self, vehicle_type: VehicleType) -> int:
        return self.max_cars if vehicle_type == VehicleType.CAR else self.max_motorcycles

    def hourly_rate_for(self, vehicle_type: VehicleType) -> int:
        return self.hourly_car_rate if vehicle_type == VehicleType.CAR else self.hourly_motorcycle_rate

    def monthly_rate_for(self, vehicle_type: VehicleType) -> int:
        return self.monthly_car_rate if vehicle_type == VehicleType.CAR else self.monthly_motorcycle_rate

    def weekly_rate_for(self, vehicle_type: VehicleType) -> Amount:
        # Plain division, no rounding: 30000 / 4 -> 7500, 50001 / 4 -> 12500.25
        return as_amount(self.monthly_rate_for(vehicle_type) / WEEKS_PER_MONTH)

    def period_rate_for(self, vehicle_type: VehicleType, unit: TimeUnit) -> Amount:
        if unit == TimeUnit.MONTHS:
            return self.monthly_rate_for(vehicle_type)
        return self.weekly_rate_for(vehicle_type)

    def to_storage(self) -> dict:
        values = asdict(self)
        return {key: str(values[attr]) for key, attr in STORAGE_FIELDS.items()}

    @classmethod
    def from_storage(cls, data: Mapping, strip_non_digits: bool = False) -> "PriceConfig":
        """Build from the storage document. Every key is required."""
        missing = [key for key in STORAGE_FIELDS if key not in data]
        if missing:
            raise ValidationError(f"Missing price fields: {', '.join(missing)}")
        return cls(**{
            attr: _parse_field(key, data[key], strip_non_digits)
            for key, attr in STORAGE_FIELDS.items()
        })
