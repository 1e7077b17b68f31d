from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel
from ...enum.booking_enum import Currency


class PaymentCreate(BaseModel):
    booking_id: int
    amount: Decimal
    currency: Currency
    notes: Optional[str] = None


class PaymentOut(BaseModel):
    id: int
    booking_id: int
    amount: Decimal
    currency: Currency
    amount_in_base: Decimal
    payment_date: Optional[datetime] = None
    notes: Optional[str] = None
    created_by: int
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
