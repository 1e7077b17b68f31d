from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models.bookings.bookings import Booking
from ...models.bookings.expenses import Expense
from ...models.bookings.payments import Payment
from ...models.masters.customers import Customer
from ...schemas.financials.reports_schemas import DashboardStats
from ..bookings.pricing import to_money


def get_dashboard_stats(db: Session) -> DashboardStats:
    customer_count = db.query(func.count(Customer.id)).scalar() or 0
    booking_count = db.query(func.count(Booking.id)).scalar() or 0

    # ------------------- Totals -------------------
    total_selling = to_money(
        db.query(func.coalesce(func.sum(Booking.total_selling_price), 0)).scalar())
    total_cost = to_money(
        db.query(func.coalesce(func.sum(Booking.total_cost_price), 0)).scalar())
    total_expenses = to_money(
        db.query(func.coalesce(func.sum(Expense.amount), 0)).scalar())
    total_paid = to_money(
        db.query(func.coalesce(func.sum(Payment.amount_in_base), 0)).scalar())

    return DashboardStats(
        customer_count=customer_count,
        booking_count=booking_count,
        total_profit=total_selling - total_cost - total_expenses,
        outstanding_payments=max(Decimal("0.00"), total_selling - total_paid),
    )
