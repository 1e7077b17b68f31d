from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_booking_db as get_db
from shared.core.schemas import UserToken
from ...crud.bookings import expenses_crud as crud
from ...schemas.bookings.expenses_schemas import ExpenseCreate, ExpenseOut

router = APIRouter(
    prefix="/api/expenses",
    tags=["Expenses"],
    dependencies=[Depends(validate_current_token)]
)


@router.get("/", response_model=List[ExpenseOut])
def get_expenses_endpoint(
    booking_id: int = Query(...),
    db: Session = Depends(get_db),
):
    return crud.get_expenses_by_booking(db, booking_id)


@router.post("/", response_model=ExpenseOut)
def create_expense_endpoint(
    expense: ExpenseCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.create_expense(db, expense, created_by=int(current_user.user_id))
