"""Monthly/weekly subscriptions — registration, renewal, removal."""

from typing import Optional

from fastapi import APIRouter, Depends

from parking_ledger.dependencies import get_ledger
from parking_ledger.schemas.subscription import (
    SubscriptionActionsOut, SubscriptionCreate, SubscriptionOut, SubscriptionRenew,
)
from parking_ledger.services.ledger_store import LedgerStore
from parking_ledger.services.ledger_views import filter_by_plate, subscription_actions
from parking_ledger.services.plate_parser import normalize_plate

router = APIRouter()


@router.get("/subscriptions", response_model=list[SubscriptionOut], summary="Active subscriptions, newest first")
def list_subscriptions(q: Optional[str] = None, ledger: LedgerStore = Depends(get_ledger)):
    return filter_by_plate(ledger.subscriptions, q)


@router.get("/subscriptions/actions", response_model=SubscriptionActionsOut,
            summary="Which actions apply to the form as filled in")
def get_subscription_actions(plate: str, holder_name: Optional[str] = None, duration: int = 0,
                             ledger: LedgerStore = Depends(get_ledger)):
    plate = normalize_plate(plate)
    actions = subscription_actions(plate, holder_name, duration, ledger.subscriptions)
    return SubscriptionActionsOut(plate=plate, can_register=actions.can_register,
                                  can_remove=actions.can_remove, can_renew=actions.can_renew)


@router.post("/subscriptions", response_model=SubscriptionOut, status_code=201, summary="Register a subscription")
async def register_subscription(body: SubscriptionCreate, ledger: LedgerStore = Depends(get_ledger)):
    return await ledger.register_subscription(
        body.plate, body.holder_name, body.national_id, body.duration, body.unit,
    )


@router.put("/subscriptions/{plate}/renew", response_model=SubscriptionOut, summary="Extend a subscription")
async def renew_subscription(plate: str, body: SubscriptionRenew, ledger: LedgerStore = Depends(get_ledger)):
    """Extends from the recorded expiry. Unpaid renewals add to the outstanding balance."""
    return await ledger.renew_subscription(plate, body.duration, body.unit, body.paid)


@router.delete("/subscriptions/{plate}", response_model=SubscriptionOut, summary="Remove a paid-up subscription")
async def remove_subscription(plate: str, ledger: LedgerStore = Depends(get_ledger)):
    """Only remove once the holder has paid: the amount due is credited to revenue."""
    return await ledger.remove_subscription(plate)
