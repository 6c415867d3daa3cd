"""Occupancy across both populations, and the running revenue total."""

from fastapi import APIRouter, Depends

from parking_ledger.dependencies import get_ledger, get_price_service
from parking_ledger.schemas.revenue import OccupancyOut, RevenueOut
from parking_ledger.services.ledger_store import LedgerStore
from parking_ledger.services.ledger_views import occupancy_summary
from parking_ledger.services.price_config_service import PriceConfigService

router = APIRouter()


@router.get("/occupancy", response_model=list[OccupancyOut])
def get_occupancy(ledger: LedgerStore = Depends(get_ledger),
                  prices: PriceConfigService = Depends(get_price_service)):
    """Hourly + subscription vehicles per type against the configured limits."""
    return occupancy_summary(ledger.occupancy(), prices.current)


@router.get("/revenue", response_model=RevenueOut)
def get_revenue(ledger: LedgerStore = Depends(get_ledger)):
    return ledger.revenue
