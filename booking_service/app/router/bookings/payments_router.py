from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_booking_db as get_db
from shared.core.schemas import UserToken
from ...crud.bookings import payments_crud as crud
from ...schemas.bookings.payments_schemas import PaymentCreate, PaymentOut

router = APIRouter(
    prefix="/api/payments",
    tags=["Payments"],
    dependencies=[Depends(validate_current_token)]
)


@router.get("/", response_model=List[PaymentOut])
def get_payments_endpoint(
    booking_id: int = Query(...),
    db: Session = Depends(get_db),
):
    return crud.get_payments_by_booking(db, booking_id)


@router.post("/", response_model=PaymentOut)
def record_payment_endpoint(
    payment: PaymentCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.record_payment(db, payment, created_by=int(current_user.user_id))
