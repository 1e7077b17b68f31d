from typing import Optional
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from shared.core.exceptions import NotFoundError, ReferentialIntegrityError
from shared.core.schemas import CommonQueryParams
from ...models.masters.customers import Customer
from ...models.bookings.bookings import Booking
from ...schemas.masters.customers_schemas import CustomerCreate, CustomerOut, CustomerUpdate


def build_customer_filters(params: CommonQueryParams):
    filters = []
    if params.search:
        search_term = f"%{params.search}%"
        filters.append(or_(
            Customer.name.ilike(search_term),
            Customer.email.ilike(search_term),
            Customer.phone.ilike(search_term),
        ))
    return filters


def get_customers(db: Session, params: CommonQueryParams):
    base_query = db.query(Customer).filter(*build_customer_filters(params))
    total = base_query.with_entities(func.count(Customer.id)).scalar()

    customers = (
        base_query
        .order_by(Customer.name.asc(), Customer.id.asc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )
    return {"customers": [CustomerOut.model_validate(c) for c in customers], "total": total}


def get_customer_by_id(db: Session, customer_id: int) -> Optional[Customer]:
    return db.query(Customer).filter(Customer.id == customer_id).first()


def create_customer(db: Session, customer: CustomerCreate) -> Customer:
    db_customer = Customer(**customer.model_dump())
    db.add(db_customer)
    db.commit()
    db.refresh(db_customer)
    return db_customer


def update_customer(db: Session, customer_update: CustomerUpdate) -> Customer:
    db_customer = get_customer_by_id(db, customer_update.id)
    if not db_customer:
        raise NotFoundError(f"Customer with ID {customer_update.id} not found")

    # Update only fields provided
    update_data = customer_update.model_dump(exclude_unset=True, exclude={"id"})
    for key, value in update_data.items():
        setattr(db_customer, key, value)

    db.commit()
    db.refresh(db_customer)
    return db_customer


def delete_customer(db: Session, customer_id: int) -> bool:
    booking_count = db.query(func.count(Booking.id)).filter(
        Booking.customer_id == customer_id).scalar()
    if booking_count:
        raise ReferentialIntegrityError(
            "Cannot delete customer with existing bookings")

    db_customer = get_customer_by_id(db, customer_id)
    if not db_customer:
        raise NotFoundError(f"Customer with ID {customer_id} not found")

    db.delete(db_customer)
    db.commit()
    return True
