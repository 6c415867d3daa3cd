"""Price table and capacity limits — read freely, edit with the admin password."""

from fastapi import APIRouter, Depends

from parking_ledger.dependencies import get_price_service
from parking_ledger.schemas.price_config import PriceConfigOut, PriceConfigUpdate
from parking_ledger.services.price_config_service import PriceConfigService
from parking_ledger.services.price_table import STORAGE_FIELDS

router = APIRouter()

ATTRIBUTE_TO_KEY = {attr: key for key, attr in STORAGE_FIELDS.items()}


@router.get("/config/prices", response_model=PriceConfigOut, summary="Current price table")
def get_prices(prices: PriceConfigService = Depends(get_price_service)):
    return prices.current


@router.put("/config/prices", response_model=PriceConfigOut, summary="Edit price table (password required)")
async def update_prices(body: PriceConfigUpdate, prices: PriceConfigService = Depends(get_price_service)):
    changes = body.model_dump(exclude={"password"}, exclude_none=True)
    values = {ATTRIBUTE_TO_KEY[attr]: value for attr, value in changes.items()}
    return await prices.update(values, body.password)
