import logging
import secrets
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from shared.helpers.user_helper import get_user_by_id
from ...enum.booking_enum import BookingStatus, PaymentStatus
from ...models.bookings.bookings import Booking
from ...models.bookings.hotel_booking_items import HotelBookingItem
from ...models.bookings.service_booking_items import ServiceBookingItem
from ...schemas.bookings.bookings_schemas import (
    BookingCreate,
    BookingDetailOut,
    BookingOut,
    BookingRequest,
    HotelBookingItemOut,
    ServiceBookingItemOut,
)
from ..masters.customers_crud import get_customer_by_id
from ..masters.hotels_crud import get_hotels_by_ids
from ..masters.services_crud import get_services_by_ids
from .pricing import price_hotel_line, price_service_line, sum_lines

logger = logging.getLogger(__name__)


def generate_booking_number() -> str:
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    return f"{settings.BOOKING_NUMBER_PREFIX}{timestamp}{secrets.token_hex(3).upper()}"


# ----------------- Build Filters -----------------
def build_booking_filters(params: BookingRequest):
    filters = []

    if params.status:
        filters.append(Booking.status == params.status.value)

    if params.payment_status:
        filters.append(Booking.payment_status == params.payment_status.value)

    if params.search:
        filters.append(Booking.booking_number.ilike(f"%{params.search}%"))

    return filters


# ----------------- Get All Bookings -----------------
def get_bookings(db: Session, params: BookingRequest):
    base_query = db.query(Booking).filter(*build_booking_filters(params))
    total = base_query.with_entities(func.count(Booking.id)).scalar()

    bookings = (
        base_query
        .order_by(Booking.created_at.desc(), Booking.id.desc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    return {"bookings": [BookingOut.model_validate(b) for b in bookings], "total": total}


# ----------------- Get Single Booking -----------------
def get_booking(db: Session, booking_id: int) -> Optional[Booking]:
    return db.query(Booking).filter(Booking.id == booking_id).first()


def get_booking_by_id(db: Session, booking_id: int) -> Optional[BookingDetailOut]:
    db_booking = get_booking(db, booking_id)
    if not db_booking:
        return None

    return BookingDetailOut(
        booking=BookingOut.model_validate(db_booking),
        hotel_bookings=[HotelBookingItemOut.model_validate(item)
                        for item in db_booking.hotel_items],
        service_bookings=[ServiceBookingItemOut.model_validate(item)
                          for item in db_booking.service_items],
    )


# ----------------- Create Booking -----------------
def _validate_booking_request(db: Session, request: BookingCreate, created_by: int):
    """Check every reference and every line before anything is written."""
    if not get_customer_by_id(db, request.customer_id):
        raise NotFoundError(f"Customer with ID {request.customer_id} not found")

    if not get_user_by_id(db, created_by):
        raise NotFoundError(f"User with ID {created_by} not found")

    for line in request.hotel_bookings:
        if line.check_out_date <= line.check_in_date:
            raise InvalidInputError(
                f"Check-out date must be after check-in date for hotel {line.hotel_id}")
        if line.number_of_rooms <= 0:
            raise InvalidInputError(
                f"Number of rooms must be positive for hotel {line.hotel_id}")

    for line in request.services:
        if line.quantity <= 0:
            raise InvalidInputError(
                f"Quantity must be positive for service {line.service_id}")

    hotels = get_hotels_by_ids(db, [line.hotel_id for line in request.hotel_bookings])
    for line in request.hotel_bookings:
        if line.hotel_id not in hotels:
            raise NotFoundError(f"Hotel with ID {line.hotel_id} not found")

    services = get_services_by_ids(db, [line.service_id for line in request.services])
    for line in request.services:
        if line.service_id not in services:
            raise NotFoundError(f"Service with ID {line.service_id} not found")

    return hotels, services


def _build_booking(request: BookingCreate, created_by: int, hotels, services) -> Booking:
    line_prices = []
    hotel_items = []
    for line in request.hotel_bookings:
        price = price_hotel_line(hotels[line.hotel_id], line.number_of_rooms)
        line_prices.append(price)
        hotel_items.append(HotelBookingItem(
            hotel_id=line.hotel_id,
            room_type=line.room_type.value,
            meal_plan=line.meal_plan.value,
            check_in_date=line.check_in_date,
            check_out_date=line.check_out_date,
            number_of_rooms=line.number_of_rooms,
            cost_price=price.cost_price,
            selling_price=price.selling_price,
        ))

    service_items = []
    for line in request.services:
        price = price_service_line(services[line.service_id], line.quantity)
        line_prices.append(price)
        service_items.append(ServiceBookingItem(
            service_id=line.service_id,
            quantity=line.quantity,
            cost_price=price.cost_price,
            selling_price=price.selling_price,
        ))

    totals = sum_lines(line_prices)
    return Booking(
        customer_id=request.customer_id,
        booking_number=generate_booking_number(),
        total_cost_price=totals.cost_price,
        total_selling_price=totals.selling_price,
        status=BookingStatus.draft.value,
        payment_status=PaymentStatus.pending.value,
        created_by=created_by,
        hotel_items=hotel_items,
        service_items=service_items,
    )


def create_booking(db: Session, request: BookingCreate, created_by: int) -> Booking:
    hotels, services = _validate_booking_request(db, request, created_by)

    max_attempts = max(1, settings.BOOKING_NUMBER_MAX_ATTEMPTS)
    for attempt in range(1, max_attempts + 1):
        db_booking = _build_booking(request, created_by, hotels, services)
        # booking and line items commit as one unit or not at all
        db.add(db_booking)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(
                "Booking number %s collided (attempt %s of %s)",
                db_booking.booking_number, attempt, max_attempts)
            continue
        except Exception:
            db.rollback()
            raise

        db.refresh(db_booking)
        logger.info("Booking %s created for customer %s: cost=%s selling=%s",
                    db_booking.booking_number, request.customer_id,
                    db_booking.total_cost_price, db_booking.total_selling_price)
        return db_booking

    raise ConflictError(
        "Could not allocate a unique booking number, please retry")


# ----------------- Delete Booking -----------------
def delete_booking(db: Session, booking_id: int) -> bool:
    db_booking = get_booking(db, booking_id)
    if not db_booking:
        raise NotFoundError(f"Booking with ID {booking_id} not found")

    # line items, payments and expenses go with it
    db.delete(db_booking)
    db.commit()
    logger.info("Booking %s deleted", db_booking.booking_number)
    return True
