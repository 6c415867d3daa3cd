"""Plate input normalization — called on every keystroke of the plate field."""

from fastapi import APIRouter

from parking_ledger.schemas.plate import PlateKeystroke, PlateOut
from parking_ledger.services.billing_calculator import classify_plate
from parking_ledger.services.plate_parser import apply_keystroke, is_complete_plate

router = APIRouter()


@router.post("/plates/normalize", response_model=PlateOut, summary="Normalize plate field input")
def normalize(body: PlateKeystroke):
    plate = apply_keystroke(body.previous, body.text)
    complete = is_complete_plate(plate)
    return PlateOut(plate=plate, is_complete=complete,
                    vehicle_type=classify_plate(plate) if complete else None)
