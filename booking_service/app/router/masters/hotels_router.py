from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_booking_db as get_db
from shared.helpers.json_response_helper import success_response
from shared.core.exceptions import NotFoundError
from shared.core.schemas import CommonQueryParams
from shared.utils.app_status_code import AppStatusCode
from ...crud.masters import hotels_crud as crud
from ...schemas.masters.hotels_schemas import (
    HotelCreate,
    HotelListResponse,
    HotelOut,
    HotelUpdate,
)

router = APIRouter(
    prefix="/api/hotels",
    tags=["Hotels"],
    dependencies=[Depends(validate_current_token)]
)


# ---------------- List ----------------
@router.get("/all", response_model=HotelListResponse)
def get_hotels_endpoint(
    params: CommonQueryParams = Depends(),
    db: Session = Depends(get_db),
):
    return crud.get_hotels(db, params)


# ---------------- Get By Id ----------------
@router.get("/{hotel_id}", response_model=HotelOut)
def get_hotel_endpoint(
    hotel_id: int,
    db: Session = Depends(get_db),
):
    db_hotel = crud.get_hotel_by_id(db, hotel_id)
    if not db_hotel:
        raise NotFoundError(f"Hotel with ID {hotel_id} not found")
    return db_hotel


# ---------------- Create ----------------
@router.post("/", response_model=HotelOut)
def create_hotel_endpoint(
    hotel: HotelCreate,
    db: Session = Depends(get_db),
):
    return crud.create_hotel(db, hotel)


# ---------------- Update ----------------
@router.put("/", response_model=HotelOut)
def update_hotel_endpoint(
    hotel_update: HotelUpdate,
    db: Session = Depends(get_db),
):
    return crud.update_hotel(db, hotel_update)


# ---------------- Delete ----------------
@router.delete("/{hotel_id}")
def delete_hotel_endpoint(
    hotel_id: int,
    db: Session = Depends(get_db),
):
    crud.delete_hotel(db, hotel_id)
    return success_response(
        data={"message": "Hotel deleted successfully"},
        message="Hotel deleted successfully",
        status_code=AppStatusCode.OPERATION_SUCCESSFUL
    )
