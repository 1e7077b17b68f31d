"""Booking status transitions and the derived payment status."""
import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.exceptions import InvalidInputError, NotFoundError
from ...enum.booking_enum import BookingStatus, PaymentStatus
from ...models.bookings.bookings import Booking

logger = logging.getLogger(__name__)

BOOKING_TRANSITIONS = {
    BookingStatus.draft: {BookingStatus.confirmed, BookingStatus.cancelled},
    BookingStatus.confirmed: {BookingStatus.completed, BookingStatus.cancelled},
    BookingStatus.completed: set(),
    BookingStatus.cancelled: set(),
}


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    if current == target:
        return True
    return target in BOOKING_TRANSITIONS.get(current, set())


def assert_booking_transition(current: BookingStatus, target: BookingStatus) -> None:
    if not can_transition(current, target):
        raise InvalidInputError(
            f"Invalid booking status transition: {current.value} -> {target.value}")


def derive_payment_status(paid_total: Decimal, total_selling_price: Decimal) -> PaymentStatus:
    if paid_total <= 0:
        return PaymentStatus.pending
    if paid_total < total_selling_price:
        return PaymentStatus.partial
    return PaymentStatus.paid


def update_booking_status(db: Session, booking_id: int, new_status: BookingStatus) -> Booking:
    db_booking = db.query(Booking).filter(Booking.id == booking_id).first()
    if not db_booking:
        raise NotFoundError(f"Booking with ID {booking_id} not found")

    new_status = BookingStatus(new_status)
    current = BookingStatus(db_booking.status)
    if settings.ENFORCE_STATUS_TRANSITIONS:
        assert_booking_transition(current, new_status)

    db_booking.status = new_status.value
    db.commit()
    db.refresh(db_booking)
    logger.info("Booking %s status %s -> %s",
                db_booking.booking_number, current.value, new_status.value)
    return db_booking
