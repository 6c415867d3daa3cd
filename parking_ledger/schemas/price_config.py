# parking_ledger/schemas/price_config.py
from pydantic import BaseModel
from typing import Optional, Union


class PriceConfigOut(BaseModel):
    max_motorcycles: int
    max_cars: int
    hourly_motorcycle_rate: int
    hourly_car_rate: int
    monthly_motorcycle_rate: int
    monthly_car_rate: int

    class Config:
        from_attributes = True


class PriceConfigUpdate(BaseModel):
    """Fields left out keep their current value. Numeric text is accepted."""
    password: str
    max_motorcycles: Optional[Union[int, str]] = None
    max_cars: Optional[Union[int, str]] = None
    hourly_motorcycle_rate: Optional[Union[int, str]] = None
    hourly_car_rate: Optional[Union[int, str]] = None
    monthly_motorcycle_rate: Optional[Union[int, str]] = None
    monthly_car_rate: Optional[Union[int, str]] = None
