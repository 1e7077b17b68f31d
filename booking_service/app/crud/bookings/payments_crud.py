import logging
from decimal import Decimal
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.exceptions import InvalidInputError, NotFoundError
from shared.helpers.user_helper import get_user_by_id
from ...enum.booking_enum import Currency, PaymentStatus
from ...models.bookings.bookings import Booking
from ...models.bookings.payments import Payment
from ...schemas.bookings.bookings_schemas import BookingBalanceOut
from ...schemas.bookings.payments_schemas import PaymentCreate
from ..financials.exchange_rates_crud import convert
from .booking_state import derive_payment_status
from .pricing import MAX_MONEY, to_money

logger = logging.getLogger(__name__)


def _get_booking_or_raise(db: Session, booking_id: int) -> Booking:
    db_booking = db.query(Booking).filter(Booking.id == booking_id).first()
    if not db_booking:
        raise NotFoundError(f"Booking with ID {booking_id} not found")
    return db_booking


def get_payments_by_booking(db: Session, booking_id: int) -> List[Payment]:
    return (
        db.query(Payment)
        .filter(Payment.booking_id == booking_id)
        .order_by(Payment.payment_date.asc(), Payment.id.asc())
        .all()
    )


def paid_total(db: Session, booking_id: int) -> Decimal:
    total = db.query(func.coalesce(func.sum(Payment.amount_in_base), 0)).filter(
        Payment.booking_id == booking_id).scalar()
    return to_money(total)


def outstanding_amount(total_selling_price, paid: Decimal) -> Decimal:
    return max(Decimal("0.00"), to_money(total_selling_price) - to_money(paid))


def refresh_payment_status(db: Session, db_booking: Booking) -> PaymentStatus:
    """Recompute payment_status from the ledger; the caller commits."""
    db.flush()
    status = derive_payment_status(
        paid_total(db, db_booking.id), to_money(db_booking.total_selling_price))
    db_booking.payment_status = status.value
    return status


def get_booking_balance(db: Session, booking_id: int) -> BookingBalanceOut:
    db_booking = _get_booking_or_raise(db, booking_id)
    paid = paid_total(db, booking_id)
    total = to_money(db_booking.total_selling_price)
    return BookingBalanceOut(
        booking_id=db_booking.id,
        total_selling_price=total,
        paid_amount=paid,
        outstanding_amount=outstanding_amount(total, paid),
        payment_status=derive_payment_status(paid, total),
    )


def _lock_booking_or_raise(db: Session, booking_id: int) -> Booking:
    # row lock: payments on one booking serialize, so each status
    # recompute sees every earlier committed payment
    db_booking = (
        db.query(Booking)
        .filter(Booking.id == booking_id)
        .with_for_update()
        .first()
    )
    if not db_booking:
        raise NotFoundError(f"Booking with ID {booking_id} not found")
    return db_booking


def record_payment(db: Session, request: PaymentCreate, created_by: int) -> Payment:
    # checked after rounding, so sub-cent amounts are rejected too
    amount = to_money(request.amount)
    if amount <= 0:
        raise InvalidInputError("Payment amount must be positive")
    if amount > MAX_MONEY:
        raise InvalidInputError(f"Payment amount must not exceed {MAX_MONEY}")

    if not get_user_by_id(db, created_by):
        raise NotFoundError(f"User with ID {created_by} not found")

    base_currency = settings.BASE_CURRENCY
    try:
        db_booking = _lock_booking_or_raise(db, request.booking_id)

        amount_in_base = to_money(convert(db, amount, request.currency, base_currency))
        if amount_in_base > MAX_MONEY:
            raise InvalidInputError(
                f"Payment amount in {base_currency.value} must not exceed {MAX_MONEY}")

        db_payment = Payment(
            booking_id=db_booking.id,
            amount=amount,
            currency=Currency(request.currency).value,
            amount_in_base=amount_in_base,
            notes=request.notes,
            created_by=created_by,
        )
        db.add(db_payment)
        # the payment and the recomputed booking status commit together
        status = refresh_payment_status(db, db_booking)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(db_payment)
    logger.info("Payment %s %s (%s %s) recorded on booking %s, status now %s",
                db_payment.amount, db_payment.currency, db_payment.amount_in_base,
                base_currency.value, db_booking.booking_number, status.value)
    return db_payment
