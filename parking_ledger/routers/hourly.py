"""Hourly parking — entry registration, exit billing, active list."""

from typing import Optional

from fastapi import APIRouter, Depends

from parking_ledger.dependencies import get_ledger
from parking_ledger.schemas.hourly import (
    BillingReceiptOut, HourlyActionsOut, HourlyCreate, HourlySessionOut,
)
from parking_ledger.services.ledger_store import LedgerStore
from parking_ledger.services.ledger_views import filter_by_plate, hourly_actions
from parking_ledger.services.plate_parser import normalize_plate

router = APIRouter()


@router.get("/hourly", response_model=list[HourlySessionOut], summary="Active hourly sessions, newest first")
def list_hourly(q: Optional[str] = None, ledger: LedgerStore = Depends(get_ledger)):
    return filter_by_plate(ledger.hourly_sessions, q)


@router.get("/hourly/actions", response_model=HourlyActionsOut, summary="Which actions apply to a plate")
def get_hourly_actions(plate: str, ledger: LedgerStore = Depends(get_ledger)):
    plate = normalize_plate(plate)
    actions = hourly_actions(plate, ledger.hourly_sessions)
    return HourlyActionsOut(plate=plate, can_register=actions.can_register, can_bill=actions.can_bill)


@router.post("/hourly", response_model=HourlySessionOut, status_code=201, summary="Register a vehicle entry")
async def register_hourly(body: HourlyCreate, ledger: LedgerStore = Depends(get_ledger)):
    """The response carries everything the ticket printer needs (plate, type, entry time)."""
    return await ledger.register_hourly(body.plate)


@router.post("/hourly/{plate}/bill", response_model=BillingReceiptOut, summary="Bill and release a vehicle")
async def bill_hourly(plate: str, ledger: LedgerStore = Depends(get_ledger)):
    return await ledger.bill_hourly(plate)
