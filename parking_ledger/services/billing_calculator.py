# parking_ledger/services/billing_calculator.py
"""
Charges for hourly sessions and subscriptions, renewal terms, and the
calendar arithmetic behind subscription expiry.

Type from plate shape:
  ABC-12   -> motorcycle (old 6-character plate)
  ABC-12D  -> motorcycle (letter at index 6)
  ABC-123  -> car        (digit at index 6)
"""

import calendar
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Tuple

from parking_ledger.services.entities import Amount, Subscription, TimeUnit, VehicleType
from parking_ledger.services.price_table import PriceConfig, as_amount
from parking_ledger.utils.date_format import format_display_date, to_display_zone

SECONDS_PER_HOUR = 3600


def classify_plate(plate: str) -> VehicleType:
    if len(plate) == 6 or (len(plate) > 6 and plate[6].isalpha()):
        return VehicleType.MOTORCYCLE
    return VehicleType.CAR


def elapsed_hours(entry: datetime, now: datetime) -> int:
    """Whole hours, always rounded up; a same-instant exit still bills one hour."""
    seconds = abs((now - entry).total_seconds())
    return max(1, math.ceil(seconds / SECONDS_PER_HOUR))


def hourly_charge(vehicle_type: VehicleType, entry: datetime, now: datetime,
                  prices: PriceConfig) -> Tuple[int, Amount]:
    hours = elapsed_hours(entry, now)
    return hours, hours * prices.hourly_rate_for(vehicle_type)


def subscription_charge(vehicle_type: VehicleType, duration: int, unit: TimeUnit,
                        prices: PriceConfig) -> Amount:
    return as_amount(duration * prices.period_rate_for(vehicle_type, unit))


def add_period(value: datetime, amount: int, unit: TimeUnit) -> datetime:
    """
    Calendar extension. Months keep the day of month, clamped to the last day
    of the target month (Jan 31 + 1 month -> Feb 28/29). Weeks add 7-day blocks.
    Time of day and tzinfo are preserved.
    """
    if unit == TimeUnit.WEEKS:
        return value + timedelta(days=amount * 7)

    month_index = value.month - 1 + amount
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return value.replace(year=year, month=month, day=min(value.day, last_day))


@dataclass(frozen=True)
class RenewalTerms:
    expiry_timestamp: datetime
    formatted_expiry: str
    duration: int
    amount_due: Amount
    period_charge: Amount


def renewal_terms(subscription: Subscription, duration: int, unit: TimeUnit, paid: bool,
                  prices: PriceConfig) -> RenewalTerms:
    """
    Extends from the recorded expiry, never from now, so early renewals stack.
    Paid: the new period charge replaces the previous balance.
    Unpaid: it is added on top of it.
    """
    # stored expiries carry a fixed offset; calendar steps follow the zone rules
    expiry = add_period(to_display_zone(subscription.expiry_timestamp), duration, unit)
    charge = subscription_charge(subscription.type, duration, unit, prices)
    amount_due = charge if paid else as_amount(subscription.amount_due + charge)
    return RenewalTerms(
        expiry_timestamp=expiry,
        formatted_expiry=format_display_date(expiry),
        duration=subscription.duration + duration,
        amount_due=amount_due,
        period_charge=charge,
    )
