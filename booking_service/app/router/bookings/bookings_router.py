from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_booking_db as get_db
from shared.helpers.json_response_helper import success_response
from shared.core.exceptions import NotFoundError
from shared.core.schemas import UserToken
from shared.utils.app_status_code import AppStatusCode
from ...crud.bookings import bookings_crud as crud
from ...crud.bookings.booking_state import update_booking_status
from ...crud.bookings.payments_crud import get_booking_balance
from ...schemas.bookings.bookings_schemas import (
    BookingBalanceOut,
    BookingCreate,
    BookingDetailOut,
    BookingListResponse,
    BookingOut,
    BookingRequest,
    BookingStatusUpdate,
)

router = APIRouter(
    prefix="/api/bookings",
    tags=["Bookings"],
    dependencies=[Depends(validate_current_token)]
)


# ---------------- List Bookings ----------------
@router.get("/all", response_model=BookingListResponse)
def get_bookings_endpoint(
    params: BookingRequest = Depends(),
    db: Session = Depends(get_db),
):
    return crud.get_bookings(db, params)


# ---------------- Get Booking ----------------
@router.get("/{booking_id}", response_model=BookingDetailOut)
def get_booking_endpoint(
    booking_id: int,
    db: Session = Depends(get_db),
):
    booking = crud.get_booking_by_id(db, booking_id)
    if not booking:
        raise NotFoundError(f"Booking with ID {booking_id} not found")
    return booking


# ---------------- Create Booking ----------------
@router.post("/", response_model=BookingOut)
def create_booking_endpoint(
    booking: BookingCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.create_booking(db, booking, created_by=int(current_user.user_id))


# ---------------- Update Status ----------------
@router.put("/{booking_id}/status", response_model=BookingOut)
def update_booking_status_endpoint(
    booking_id: int,
    status_update: BookingStatusUpdate,
    db: Session = Depends(get_db),
):
    return update_booking_status(db, booking_id, status_update.status)


# ---------------- Balance ----------------
@router.get("/{booking_id}/balance", response_model=BookingBalanceOut)
def get_booking_balance_endpoint(
    booking_id: int,
    db: Session = Depends(get_db),
):
    return get_booking_balance(db, booking_id)


# ---------------- Delete Booking ----------------
@router.delete("/{booking_id}")
def delete_booking_endpoint(
    booking_id: int,
    db: Session = Depends(get_db),
):
    crud.delete_booking(db, booking_id)
    return success_response(
        data={"message": "Booking deleted successfully"},
        message="Booking deleted successfully",
        status_code=AppStatusCode.OPERATION_SUCCESSFUL
    )
