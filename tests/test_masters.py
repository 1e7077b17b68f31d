"""Customer, hotel and service master data, plus user seeding."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from booking_service.app.crud.masters import customers_crud, hotels_crud, services_crud
from booking_service.app.schemas.masters.customers_schemas import CustomerCreate, CustomerUpdate
from booking_service.app.schemas.masters.hotels_schemas import HotelCreate, HotelUpdate
from booking_service.app.schemas.masters.services_schemas import ServiceCreate
from shared.core.exceptions import NotFoundError, ReferentialIntegrityError
from shared.core.schemas import CommonQueryParams
from shared.data.seed_users import seed_initial_users
from shared.models.users import Users

from conftest import hotel_line, service_line


class TestCustomers:
    def test_create_search_and_update(self, db):
        customers_crud.create_customer(db, CustomerCreate(
            name="Siti Aminah", address="Bandung", phone="0812", email="siti@example.com"))
        created = customers_crud.create_customer(db, CustomerCreate(
            name="Budi Santoso", address="Surabaya", phone="0813", email="budi@example.com"))

        listing = customers_crud.get_customers(db, CommonQueryParams())
        assert listing["total"] == 2
        assert [c.name for c in listing["customers"]] == ["Budi Santoso", "Siti Aminah"]

        found = customers_crud.get_customers(db, CommonQueryParams(search="siti"))
        assert found["total"] == 1

        updated = customers_crud.update_customer(db, CustomerUpdate(id=created.id, phone="0899"))
        assert updated.phone == "0899"
        assert updated.name == "Budi Santoso"

    def test_update_missing(self, db):
        with pytest.raises(NotFoundError):
            customers_crud.update_customer(db, CustomerUpdate(id=31, phone="1"))

    def test_delete_referenced_customer(self, db, customer, make_booking):
        make_booking()
        with pytest.raises(ReferentialIntegrityError):
            customers_crud.delete_customer(db, customer.id)

    def test_delete_free_customer(self, db, customer):
        assert customers_crud.delete_customer(db, customer.id) is True
        assert customers_crud.get_customer_by_id(db, customer.id) is None
        with pytest.raises(NotFoundError):
            customers_crud.delete_customer(db, customer.id)


class TestHotels:
    def test_patch_update_keeps_other_fields(self, db, hotel):
        updated = hotels_crud.update_hotel(db, HotelUpdate(id=hotel.id, cost_price=Decimal("110")))
        assert updated.cost_price == Decimal("110.00")
        assert updated.selling_price_percentage == Decimal("20.00")
        assert updated.name == "Hilton Makkah"

    def test_markup_must_be_positive(self):
        with pytest.raises(ValidationError):
            HotelCreate(name="X", location="Y", cost_price=Decimal("1"),
                        selling_price_percentage=Decimal("0"))

    def test_delete_referenced_hotel(self, db, hotel, make_booking):
        make_booking(hotel_lines=[hotel_line(hotel.id)])
        with pytest.raises(ReferentialIntegrityError):
            hotels_crud.delete_hotel(db, hotel.id)

    def test_delete_free_hotel(self, db):
        created = hotels_crud.create_hotel(db, HotelCreate(
            name="Swissotel", location="Makkah", cost_price=Decimal("90"),
            selling_price_percentage=Decimal("15")))
        assert hotels_crud.delete_hotel(db, created.id) is True

    def test_batch_lookup(self, db, hotel):
        found = hotels_crud.get_hotels_by_ids(db, [hotel.id, 999])
        assert list(found.keys()) == [hotel.id]
        assert hotels_crud.get_hotels_by_ids(db, []) == {}


class TestServices:
    def test_create_rejects_negative_cost(self):
        with pytest.raises(ValidationError):
            ServiceCreate(name="Visa", cost_price=Decimal("-1"),
                          selling_price_percentage=Decimal("10"))

    def test_delete_referenced_service(self, db, service, make_booking):
        make_booking(service_lines=[service_line(service.id)])
        with pytest.raises(ReferentialIntegrityError):
            services_crud.delete_service(db, service.id)

    def test_delete_missing_service(self, db):
        with pytest.raises(NotFoundError):
            services_crud.delete_service(db, 5)


class TestSeedUsers:
    def test_seed_is_idempotent(self, db):
        created = seed_initial_users(db)
        assert sorted(u.username for u in created) == ["admin", "staff"]

        assert seed_initial_users(db) == []
        assert db.query(Users).count() == 2

        admin = db.query(Users).filter(Users.username == "admin").one()
        assert admin.role == "administrator"
        assert admin.password_hash != "admin"
        assert admin.verify_password("admin")
