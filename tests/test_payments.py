"""Payment ledger, balances and expenses."""

from decimal import Decimal

import pytest
from pydantic import ValidationError
from sqlalchemy import event
from sqlalchemy.dialects import postgresql

from booking_service.app.crud.bookings import expenses_crud, payments_crud
from booking_service.app.enum.booking_enum import Currency, PaymentStatus
from booking_service.app.models.bookings.bookings import Booking
from booking_service.app.models.bookings.payments import Payment
from booking_service.app.schemas.bookings.expenses_schemas import ExpenseCreate
from booking_service.app.schemas.bookings.payments_schemas import PaymentCreate
from shared.core.config import Settings
from shared.core.exceptions import InvalidInputError, NotFoundError, RateNotFoundError

from conftest import hotel_line


@pytest.fixture
def booking_800(db, make_booking, hotel):
    # 5 rooms * 100 = 500 cost, 800 selling at a 60% markup
    hotel.selling_price_percentage = Decimal("60")
    db.commit()
    return make_booking(hotel_lines=[hotel_line(hotel.id, rooms=5)])


def pay(db, user, booking, amount, currency=Currency.SAR):
    return payments_crud.record_payment(
        db, PaymentCreate(booking_id=booking.id, amount=Decimal(amount), currency=currency),
        created_by=user.id)


class TestRecordPayment:
    def test_partial_payment(self, db, user, booking_800):
        assert booking_800.total_selling_price == Decimal("800.00")

        pay(db, user, booking_800, "300")

        balance = payments_crud.get_booking_balance(db, booking_800.id)
        assert balance.paid_amount == Decimal("300.00")
        assert balance.outstanding_amount == Decimal("500.00")
        assert balance.payment_status == PaymentStatus.partial

        db.refresh(booking_800)
        assert booking_800.payment_status == PaymentStatus.partial.value

    def test_full_payment_in_two_steps(self, db, user, booking_800):
        pay(db, user, booking_800, "300")
        pay(db, user, booking_800, "500")

        db.refresh(booking_800)
        assert booking_800.payment_status == PaymentStatus.paid.value
        assert payments_crud.get_booking_balance(db, booking_800.id).outstanding_amount == Decimal("0.00")

    def test_overpayment_floors_outstanding(self, db, user, booking_800):
        pay(db, user, booking_800, "1000")

        balance = payments_crud.get_booking_balance(db, booking_800.id)
        assert balance.outstanding_amount == Decimal("0.00")
        assert balance.payment_status == PaymentStatus.paid

    def test_foreign_currency_is_converted(self, db, user, booking_800, usd_rate):
        payment = pay(db, user, booking_800, "100", Currency.USD)

        assert payment.amount == Decimal("100.00")
        assert payment.currency == "USD"
        assert payment.amount_in_base == Decimal("375.00")
        assert payments_crud.paid_total(db, booking_800.id) == Decimal("375.00")

    def test_captured_base_amount_survives_rate_change(self, db, user, booking_800, usd_rate):
        pay(db, user, booking_800, "100", Currency.USD)

        usd_rate.rate = Decimal("4.00")
        db.commit()

        assert payments_crud.paid_total(db, booking_800.id) == Decimal("375.00")

    def test_missing_rate_records_nothing(self, db, user, booking_800):
        with pytest.raises(RateNotFoundError):
            pay(db, user, booking_800, "100", Currency.IDR)
        assert db.query(Payment).count() == 0

    def test_non_positive_amount(self, db, user, booking_800):
        with pytest.raises(InvalidInputError):
            pay(db, user, booking_800, "0")
        with pytest.raises(InvalidInputError):
            pay(db, user, booking_800, "-5")

    def test_sub_cent_amount_rejected_after_rounding(self, db, user, booking_800):
        with pytest.raises(InvalidInputError):
            pay(db, user, booking_800, "0.001")
        assert db.query(Payment).count() == 0

        # the session stays usable
        pay(db, user, booking_800, "0.005")
        assert payments_crud.paid_total(db, booking_800.id) == Decimal("0.01")

    def test_amount_beyond_column_range(self, db, user, booking_800, usd_rate):
        with pytest.raises(InvalidInputError):
            pay(db, user, booking_800, "100000000")
        # fits in USD, overflows once converted to SAR
        with pytest.raises(InvalidInputError):
            pay(db, user, booking_800, "99999999", Currency.USD)
        assert db.query(Payment).count() == 0

    def test_booking_row_is_locked(self, db, user, booking_800):
        statements = []

        @event.listens_for(db, "do_orm_execute")
        def capture(orm_execute_state):
            if orm_execute_state.is_select:
                statements.append(str(orm_execute_state.statement.compile(
                    dialect=postgresql.dialect())))

        try:
            pay(db, user, booking_800, "100")
        finally:
            event.remove(db, "do_orm_execute", capture)

        locked = [s for s in statements if "FOR UPDATE" in s]
        assert len(locked) == 1
        assert "FROM bookings" in locked[0]

    def test_unknown_booking(self, db, user):
        with pytest.raises(NotFoundError):
            payments_crud.record_payment(
                db, PaymentCreate(booking_id=404, amount=Decimal("1"), currency=Currency.SAR),
                created_by=user.id)

    def test_payments_listed_in_order(self, db, user, booking_800):
        first = pay(db, user, booking_800, "100")
        second = pay(db, user, booking_800, "200")

        payments = payments_crud.get_payments_by_booking(db, booking_800.id)
        assert [p.id for p in payments] == [first.id, second.id]

    def test_balance_of_missing_booking(self, db):
        with pytest.raises(NotFoundError):
            payments_crud.get_booking_balance(db, 12)


class TestExpenses:
    def test_create_and_list(self, db, user, booking_800):
        expenses_crud.create_expense(
            db, ExpenseCreate(booking_id=booking_800.id, expense_name="Visa fee",
                              amount=Decimal("45.5")), created_by=user.id)

        expenses = expenses_crud.get_expenses_by_booking(db, booking_800.id)
        assert len(expenses) == 1
        assert expenses[0].amount == Decimal("45.50")
        assert expenses[0].expense_name == "Visa fee"

    def test_rejects_bad_input(self, db, user, booking_800):
        with pytest.raises(InvalidInputError):
            expenses_crud.create_expense(
                db, ExpenseCreate(booking_id=booking_800.id, expense_name="Visa fee",
                                  amount=Decimal("0")), created_by=user.id)
        with pytest.raises(InvalidInputError):
            expenses_crud.create_expense(
                db, ExpenseCreate(booking_id=booking_800.id, expense_name="  ",
                                  amount=Decimal("10")), created_by=user.id)
        with pytest.raises(NotFoundError):
            expenses_crud.create_expense(
                db, ExpenseCreate(booking_id=555, expense_name="Visa fee",
                                  amount=Decimal("10")), created_by=user.id)

    def test_sub_cent_expense_rejected(self, db, user, booking_800):
        with pytest.raises(InvalidInputError):
            expenses_crud.create_expense(
                db, ExpenseCreate(booking_id=booking_800.id, expense_name="Tip",
                                  amount=Decimal("0.004")), created_by=user.id)
        with pytest.raises(InvalidInputError):
            expenses_crud.create_expense(
                db, ExpenseCreate(booking_id=booking_800.id, expense_name="Tip",
                                  amount=Decimal("123456789")), created_by=user.id)

        expenses_crud.create_expense(
            db, ExpenseCreate(booking_id=booking_800.id, expense_name="Tip",
                              amount=Decimal("0.005")), created_by=user.id)
        assert [e.amount for e in expenses_crud.get_expenses_by_booking(db, booking_800.id)] == [
            Decimal("0.01")]

    def test_deleting_booking_removes_ledger(self, db, user, booking_800):
        from booking_service.app.crud.bookings.bookings_crud import delete_booking

        pay(db, user, booking_800, "100")
        expenses_crud.create_expense(
            db, ExpenseCreate(booking_id=booking_800.id, expense_name="Visa fee",
                              amount=Decimal("10")), created_by=user.id)

        delete_booking(db, booking_800.id)
        assert db.query(Booking).count() == 0
        assert db.query(Payment).count() == 0


class TestBaseCurrencySetting:
    def test_read_from_environment(self, monkeypatch):
        monkeypatch.setenv("BASE_CURRENCY", "USD")
        assert Settings().BASE_CURRENCY == Currency.USD

    def test_unknown_code_fails_on_load(self, monkeypatch):
        monkeypatch.setenv("BASE_CURRENCY", "EUR")
        with pytest.raises(ValidationError):
            Settings()
