import os

# Must be set before the app modules build their engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BASE_CURRENCY"] = "SAR"
os.environ["ENFORCE_STATUS_TRANSITIONS"] = "True"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from booking_service.app.main import app
from booking_service.app.crud.bookings.bookings_crud import create_booking
from booking_service.app.enum.booking_enum import MealPlan, RoomType
from booking_service.app.models.financials.exchange_rates import ExchangeRate
from booking_service.app.models.masters.customers import Customer
from booking_service.app.models.masters.hotels import Hotel
from booking_service.app.models.masters.services import Service
from booking_service.app.schemas.bookings.bookings_schemas import (
    BookingCreate,
    HotelBookingLine,
    ServiceBookingLine,
)
from shared.core.auth import create_access_token
from shared.core.database import Base, BookingSessionLocal, booking_engine
from shared.models.users import Users
from shared.utils.enums import UserRole


@pytest.fixture
def db():
    Base.metadata.create_all(bind=booking_engine)
    session = BookingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=booking_engine)


@pytest.fixture
def client(db):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def user(db):
    db_user = Users(
        name="Staff Member",
        username="staff",
        # hashing is covered by the seed tests
        password_hash="not-a-real-hash",
        role=UserRole.staff.value,
        is_active=True,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


@pytest.fixture
def auth_headers(user):
    token = create_access_token({"user_id": str(user.id), "name": user.name})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def customer(db):
    db_customer = Customer(
        name="Ahmad Fauzi",
        address="Jl. Sudirman 1, Jakarta",
        phone="+62811000111",
        email="ahmad@example.com",
    )
    db.add(db_customer)
    db.commit()
    db.refresh(db_customer)
    return db_customer


@pytest.fixture
def hotel(db):
    db_hotel = Hotel(
        name="Hilton Makkah",
        location="Makkah",
        cost_price=Decimal("100.00"),
        selling_price_percentage=Decimal("20.00"),
    )
    db.add(db_hotel)
    db.commit()
    db.refresh(db_hotel)
    return db_hotel


@pytest.fixture
def service(db):
    db_service = Service(
        name="Airport Transfer",
        cost_price=Decimal("50.00"),
        selling_price_percentage=Decimal("10.00"),
    )
    db.add(db_service)
    db.commit()
    db.refresh(db_service)
    return db_service


@pytest.fixture
def usd_rate(db):
    rate = ExchangeRate(from_currency="USD", to_currency="SAR",
                        rate=Decimal("3.75"))
    db.add(rate)
    db.commit()
    db.refresh(rate)
    return rate


def hotel_line(hotel_id, rooms=1, check_in=date(2026, 3, 1), check_out=date(2026, 3, 5),
               room_type=RoomType.double, meal_plan=MealPlan.breakfast):
    return HotelBookingLine(
        hotel_id=hotel_id,
        room_type=room_type,
        meal_plan=meal_plan,
        check_in_date=check_in,
        check_out_date=check_out,
        number_of_rooms=rooms,
    )


def service_line(service_id, quantity=1):
    return ServiceBookingLine(service_id=service_id, quantity=quantity)


@pytest.fixture
def make_booking(db, customer, user):
    def _make(hotel_lines=(), service_lines=(), customer_id=None):
        request = BookingCreate(
            customer_id=customer_id or customer.id,
            hotel_bookings=list(hotel_lines),
            services=list(service_lines),
        )
        return create_booking(db, request, created_by=user.id)
    return _make
