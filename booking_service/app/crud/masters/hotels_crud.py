from typing import Dict, Iterable, Optional
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from shared.core.exceptions import NotFoundError, ReferentialIntegrityError
from shared.core.schemas import CommonQueryParams
from ...models.masters.hotels import Hotel
from ...models.bookings.hotel_booking_items import HotelBookingItem
from ...schemas.masters.hotels_schemas import HotelCreate, HotelOut, HotelUpdate


def get_hotels(db: Session, params: CommonQueryParams):
    base_query = db.query(Hotel)
    if params.search:
        search_term = f"%{params.search}%"
        base_query = base_query.filter(or_(
            Hotel.name.ilike(search_term),
            Hotel.location.ilike(search_term),
        ))
    total = base_query.with_entities(func.count(Hotel.id)).scalar()

    hotels = (
        base_query
        .order_by(Hotel.name.asc(), Hotel.id.asc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )
    return {"hotels": [HotelOut.model_validate(h) for h in hotels], "total": total}


def get_hotel_by_id(db: Session, hotel_id: int) -> Optional[Hotel]:
    return db.query(Hotel).filter(Hotel.id == hotel_id).first()


def get_hotels_by_ids(db: Session, hotel_ids: Iterable[int]) -> Dict[int, Hotel]:
    ids = set(hotel_ids)
    if not ids:
        return {}
    return {h.id: h for h in db.query(Hotel).filter(Hotel.id.in_(ids)).all()}


def create_hotel(db: Session, hotel: HotelCreate) -> Hotel:
    db_hotel = Hotel(**hotel.model_dump())
    db.add(db_hotel)
    db.commit()
    db.refresh(db_hotel)
    return db_hotel


def update_hotel(db: Session, hotel_update: HotelUpdate) -> Hotel:
    db_hotel = get_hotel_by_id(db, hotel_update.id)
    if not db_hotel:
        raise NotFoundError(f"Hotel with ID {hotel_update.id} not found")

    update_data = hotel_update.model_dump(exclude_unset=True, exclude={"id"})
    for key, value in update_data.items():
        setattr(db_hotel, key, value)

    db.commit()
    db.refresh(db_hotel)
    return db_hotel


def delete_hotel(db: Session, hotel_id: int) -> bool:
    reference_count = db.query(func.count(HotelBookingItem.id)).filter(
        HotelBookingItem.hotel_id == hotel_id).scalar()
    if reference_count:
        raise ReferentialIntegrityError(
            "Cannot delete hotel with existing bookings")

    db_hotel = get_hotel_by_id(db, hotel_id)
    if not db_hotel:
        raise NotFoundError(f"Hotel with ID {hotel_id} not found")

    db.delete(db_hotel)
    db.commit()
    return True
