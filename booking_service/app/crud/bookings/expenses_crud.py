from typing import List

from sqlalchemy.orm import Session

from shared.core.exceptions import InvalidInputError, NotFoundError
from shared.helpers.user_helper import get_user_by_id
from ...models.bookings.bookings import Booking
from ...models.bookings.expenses import Expense
from ...schemas.bookings.expenses_schemas import ExpenseCreate
from .pricing import MAX_MONEY, to_money


def get_expenses_by_booking(db: Session, booking_id: int) -> List[Expense]:
    return (
        db.query(Expense)
        .filter(Expense.booking_id == booking_id)
        .order_by(Expense.created_at.asc(), Expense.id.asc())
        .all()
    )


def create_expense(db: Session, request: ExpenseCreate, created_by: int) -> Expense:
    if not db.query(Booking.id).filter(Booking.id == request.booking_id).first():
        raise NotFoundError(f"Booking with ID {request.booking_id} not found")

    # checked after rounding, so sub-cent amounts are rejected too
    amount = to_money(request.amount)
    if amount <= 0:
        raise InvalidInputError("Expense amount must be positive")
    if amount > MAX_MONEY:
        raise InvalidInputError(f"Expense amount must not exceed {MAX_MONEY}")

    if not request.expense_name or not request.expense_name.strip():
        raise InvalidInputError("Expense name is required")

    if not get_user_by_id(db, created_by):
        raise NotFoundError(f"User with ID {created_by} not found")

    db_expense = Expense(
        booking_id=request.booking_id,
        expense_name=request.expense_name.strip(),
        amount=amount,
        created_by=created_by,
    )
    db.add(db_expense)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_expense)
    return db_expense
