from typing import Dict, Iterable, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.core.exceptions import NotFoundError, ReferentialIntegrityError
from shared.core.schemas import CommonQueryParams
from ...models.masters.services import Service
from ...models.bookings.service_booking_items import ServiceBookingItem
from ...schemas.masters.services_schemas import ServiceCreate, ServiceOut, ServiceUpdate


def get_services(db: Session, params: CommonQueryParams):
    base_query = db.query(Service)
    if params.search:
        base_query = base_query.filter(
            Service.name.ilike(f"%{params.search}%"))
    total = base_query.with_entities(func.count(Service.id)).scalar()

    services = (
        base_query
        .order_by(Service.name.asc(), Service.id.asc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )
    return {"services": [ServiceOut.model_validate(s) for s in services], "total": total}


def get_service_by_id(db: Session, service_id: int) -> Optional[Service]:
    return db.query(Service).filter(Service.id == service_id).first()


def get_services_by_ids(db: Session, service_ids: Iterable[int]) -> Dict[int, Service]:
    ids = set(service_ids)
    if not ids:
        return {}
    return {s.id: s for s in db.query(Service).filter(Service.id.in_(ids)).all()}


def create_service(db: Session, service: ServiceCreate) -> Service:
    db_service = Service(**service.model_dump())
    db.add(db_service)
    db.commit()
    db.refresh(db_service)
    return db_service


def update_service(db: Session, service_update: ServiceUpdate) -> Service:
    db_service = get_service_by_id(db, service_update.id)
    if not db_service:
        raise NotFoundError(f"Service with ID {service_update.id} not found")

    update_data = service_update.model_dump(exclude_unset=True, exclude={"id"})
    for key, value in update_data.items():
        setattr(db_service, key, value)

    db.commit()
    db.refresh(db_service)
    return db_service


def delete_service(db: Session, service_id: int) -> bool:
    reference_count = db.query(func.count(ServiceBookingItem.id)).filter(
        ServiceBookingItem.service_id == service_id).scalar()
    if reference_count:
        raise ReferentialIntegrityError(
            "Cannot delete service with existing bookings")

    db_service = get_service_by_id(db, service_id)
    if not db_service:
        raise NotFoundError(f"Service with ID {service_id} not found")

    db.delete(db_service)
    db.commit()
    return True
