from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel


class ExpenseCreate(BaseModel):
    booking_id: int
    expense_name: str
    amount: Decimal


class ExpenseOut(BaseModel):
    id: int
    booking_id: int
    expense_name: str
    amount: Decimal
    created_by: int
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
