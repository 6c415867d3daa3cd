# parking_ledger/services/ledger_store.py
"""
LedgerStore: sole owner of the two vehicle populations and the revenue total.

  hourly         pay-on-exit sessions, removed when billed
  subscriptions  prepaid monthly/weekly plans, renewed in place, removed on demand
  revenue        running total credited by billing and by subscription removal

Every mutation is followed by a full save of the collection it touched (and
of the revenue snapshot when that changed). If the save fails the in-memory
change stays applied and PersistenceError reaches the caller.
"""

import asyncio
from datetime import datetime
from typing import Callable, List, Optional

from parking_ledger.exceptions import NotFoundError, ValidationError
from parking_ledger.services import billing_calculator, capacity_guard
from parking_ledger.services.entities import (
    BillingReceipt, HourlySession, NO_NATIONAL_ID, RevenueTotal, Subscription, TimeUnit,
)
from parking_ledger.services.plate_parser import is_complete_plate, normalize_plate
from parking_ledger.services.price_table import PriceConfig, as_amount
from parking_ledger.services.storage_service import (
    HOURLY_KEY, KeyValueStorage, REVENUE_KEY, SUBSCRIPTION_KEY,
)
from parking_ledger.utils.date_format import display_zone, format_display_date, utc_now
from parking_ledger.utils.json_parser import dump_json, safe_parse_json
from parking_ledger.utils.logger import get_logger

logger = get_logger(__name__)

NAME_MAX_LENGTH = 20
NATIONAL_ID_MAX_LENGTH = 10
DURATION_MAX = 999


def validate_plate(raw: str) -> str:
    plate = normalize_plate(raw)
    if not is_complete_plate(plate):
        raise ValidationError(f"Invalid or incomplete plate: {raw!r}")
    return plate


def validate_holder_name(raw: Optional[str]) -> str:
    name = (raw or "").strip()
    if not name:
        raise ValidationError("Holder name is required")
    name = name[:NAME_MAX_LENGTH]
    return name[0].upper() + name[1:]


def validate_national_id(raw: Optional[str]) -> str:
    digits = "".join(ch for ch in (raw or "") if ch.isdigit())
    if not digits:
        return NO_NATIONAL_ID
    if len(digits) > NATIONAL_ID_MAX_LENGTH:
        raise ValidationError(f"National id is limited to {NATIONAL_ID_MAX_LENGTH} digits")
    return digits


def validate_duration(duration) -> int:
    if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
        raise ValidationError("Duration must be a positive whole number")
    if duration > DURATION_MAX:
        raise ValidationError(f"Duration is limited to {DURATION_MAX}")
    return duration


def validate_unit(unit) -> TimeUnit:
    try:
        return TimeUnit(unit)
    except ValueError:
        raise ValidationError(f"Unknown period unit: {unit!r}")


class LedgerStore:
    def __init__(self, storage: KeyValueStorage, price_source: Callable[[], PriceConfig],
                 clock: Callable[[], datetime] = utc_now):
        self._storage = storage
        self._prices = price_source
        self._clock = clock
        self._lock = asyncio.Lock()
        self._hourly: List[HourlySession] = []
        self._subscriptions: List[Subscription] = []
        self._revenue = RevenueTotal(total=0, saved_at=clock())

    # ── Read side ─────────────────────────────────────────────────────────
    @property
    def hourly_sessions(self) -> List[HourlySession]:
        return list(self._hourly)

    @property
    def subscriptions(self) -> List[Subscription]:
        return list(self._subscriptions)

    @property
    def revenue(self) -> RevenueTotal:
        return self._revenue

    def find_hourly(self, plate: str) -> Optional[HourlySession]:
        return next((s for s in self._hourly if s.plate == plate), None)

    def find_subscription(self, plate: str) -> Optional[Subscription]:
        return next((s for s in self._subscriptions if s.plate == plate), None)

    def occupancy(self) -> dict:
        return capacity_guard.occupancy(self._hourly, self._subscriptions)

    # ── Persistence ───────────────────────────────────────────────────────
    async def load(self):
        """Restore all state. Unreadable documents fall back to empty/zero."""
        self._hourly = await self._load_list(HOURLY_KEY, HourlySession.from_dict)
        self._subscriptions = await self._load_list(SUBSCRIPTION_KEY, Subscription.from_dict)

        data = safe_parse_json(await self._storage.get_item(REVENUE_KEY))
        try:
            self._revenue = RevenueTotal.from_dict(data) if isinstance(data, dict) else \
                RevenueTotal(total=0, saved_at=self._clock())
        except (KeyError, ValueError, TypeError) as e:
            logger.error(f"Unreadable revenue total, starting from 0: {e}")
            self._revenue = RevenueTotal(total=0, saved_at=self._clock())

        logger.info(
            f"Ledger loaded: {len(self._hourly)} hourly, {len(self._subscriptions)} subscriptions, "
            f"revenue={self._revenue.total}"
        )

    async def _load_list(self, key: str, from_dict) -> list:
        data = safe_parse_json(await self._storage.get_item(key))
        if not isinstance(data, list):
            return []
        try:
            return [from_dict(item) for item in data]
        except (KeyError, ValueError, TypeError) as e:
            logger.error(f"Unreadable '{key}' document, starting empty: {e}")
            return []

    async def _save_hourly(self):
        await self._storage.set_item(HOURLY_KEY, dump_json([s.to_dict() for s in self._hourly]))

    async def _save_subscriptions(self):
        await self._storage.set_item(SUBSCRIPTION_KEY, dump_json([s.to_dict() for s in self._subscriptions]))

    async def _save_revenue(self):
        self._revenue.saved_at = self._clock()
        await self._storage.set_item(REVENUE_KEY, dump_json(self._revenue.to_dict()))

    def _credit(self, amount):
        self._revenue.total = as_amount(self._revenue.total + amount)

    # ── Hourly ────────────────────────────────────────────────────────────
    async def register_hourly(self, raw_plate: str) -> HourlySession:
        plate = validate_plate(raw_plate)
        async with self._lock:
            if self.find_hourly(plate):
                raise ValidationError(f"Plate {plate} is already parked")
            vehicle_type = billing_calculator.classify_plate(plate)
            capacity_guard.ensure_admitted(
                vehicle_type, self.occupancy()[vehicle_type], self._prices()
            )

            session = HourlySession(plate=plate, type=vehicle_type, entry_timestamp=self._clock())
            self._hourly.insert(0, session)
            logger.info(f"[HOURLY] Entry {plate} ({vehicle_type.value})")
            await self._save_hourly()
            return session

    async def bill_hourly(self, raw_plate: str) -> BillingReceipt:
        plate = normalize_plate(raw_plate)
        async with self._lock:
            session = self.find_hourly(plate)
            if not session:
                logger.warning(f"[HOURLY] Bill requested for unknown plate {plate}")
                raise NotFoundError(f"No active hourly session for {plate}")

            now = self._clock()
            hours, charge = billing_calculator.hourly_charge(
                session.type, session.entry_timestamp, now, self._prices()
            )
            self._hourly = [s for s in self._hourly if s.plate != plate]
            self._credit(charge)
            logger.info(f"[HOURLY] Exit {plate}: {hours} h → {charge} (total {self._revenue.total})")

            await self._save_hourly()
            await self._save_revenue()
            return BillingReceipt(
                plate=plate, type=session.type, entry_timestamp=session.entry_timestamp,
                exit_timestamp=now, elapsed_hours=hours, charge=charge,
            )

    # ── Subscriptions ─────────────────────────────────────────────────────
    async def register_subscription(self, raw_plate: str, holder_name: str, national_id: Optional[str],
                                    duration: int, unit: TimeUnit) -> Subscription:
        plate = validate_plate(raw_plate)
        name = validate_holder_name(holder_name)
        national_id = validate_national_id(national_id)
        duration = validate_duration(duration)
        unit = validate_unit(unit)

        async with self._lock:
            if self.find_subscription(plate):
                raise ValidationError(f"Plate {plate} already has a subscription")
            vehicle_type = billing_calculator.classify_plate(plate)
            prices = self._prices()
            capacity_guard.ensure_admitted(vehicle_type, self.occupancy()[vehicle_type], prices)

            expiry = billing_calculator.add_period(self._clock().astimezone(display_zone()), duration, unit)
            subscription = Subscription(
                plate=plate,
                type=vehicle_type,
                holder_name=name,
                national_id=national_id,
                duration=duration,
                expiry_timestamp=expiry,
                formatted_expiry=format_display_date(expiry),
                amount_due=billing_calculator.subscription_charge(vehicle_type, duration, unit, prices),
            )
            self._subscriptions.insert(0, subscription)
            logger.info(
                f"[SUBSCRIPTION] New {plate} ({vehicle_type.value}) for {name}: "
                f"{duration} {unit.value}, due {subscription.amount_due}, expires {subscription.formatted_expiry}"
            )
            await self._save_subscriptions()
            return subscription

    async def renew_subscription(self, raw_plate: str, duration: int, unit: TimeUnit,
                                 paid: bool) -> Subscription:
        plate = normalize_plate(raw_plate)
        duration = validate_duration(duration)
        unit = validate_unit(unit)

        async with self._lock:
            subscription = self.find_subscription(plate)
            if not subscription:
                logger.warning(f"[SUBSCRIPTION] Renewal requested for unknown plate {plate}")
                raise NotFoundError(f"No active subscription for {plate}")

            terms = billing_calculator.renewal_terms(subscription, duration, unit, paid, self._prices())
            subscription.expiry_timestamp = terms.expiry_timestamp
            subscription.formatted_expiry = terms.formatted_expiry
            subscription.duration = terms.duration
            subscription.amount_due = terms.amount_due
            logger.info(
                f"[SUBSCRIPTION] Renewed {plate} +{duration} {unit.value} "
                f"({'paid' if paid else 'unpaid'}): due {terms.amount_due}, expires {terms.formatted_expiry}"
            )
            await self._save_subscriptions()
            return subscription

    async def remove_subscription(self, raw_plate: str) -> Subscription:
        """Removal means paid in full: the amount due is credited to revenue."""
        plate = normalize_plate(raw_plate)
        async with self._lock:
            subscription = self.find_subscription(plate)
            if not subscription:
                logger.warning(f"[SUBSCRIPTION] Removal requested for unknown plate {plate}")
                raise NotFoundError(f"No active subscription for {plate}")

            self._subscriptions = [s for s in self._subscriptions if s.plate != plate]
            self._credit(subscription.amount_due)
            logger.info(
                f"[SUBSCRIPTION] Removed {plate}: credited {subscription.amount_due} "
                f"(total {self._revenue.total})"
            )
            await self._save_subscriptions()
            await self._save_revenue()
            return subscription
