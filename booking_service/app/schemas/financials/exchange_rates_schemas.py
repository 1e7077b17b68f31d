from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel
from ...enum.booking_enum import Currency


class ExchangeRateCreate(BaseModel):
    from_currency: Currency
    to_currency: Currency
    rate: Decimal


class ExchangeRateUpdate(BaseModel):
    id: int
    rate: Decimal


class ExchangeRateOut(BaseModel):
    id: int
    from_currency: Currency
    to_currency: Currency
    rate: Decimal
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ConversionRequest(BaseModel):
    amount: Decimal
    from_currency: Currency
    to_currency: Currency


class ConversionOut(BaseModel):
    amount: Decimal
    from_currency: Currency
    to_currency: Currency
    converted_amount: Decimal
