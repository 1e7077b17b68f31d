from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import List, Optional, Tuple

from dateutil.relativedelta import relativedelta
from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.core.exceptions import InvalidInputError
from shared.core.schemas import ExportResponse
from shared.exporthelper import export_to_excel
from ...enum.booking_enum import BookingStatus, MealPlan, PaymentStatus, RoomType
from ...enum.report_enum import ReportExportType, ReportPeriod
from ...models.bookings.bookings import Booking
from ...models.bookings.expenses import Expense
from ...models.bookings.hotel_booking_items import HotelBookingItem
from ...models.bookings.payments import Payment
from ...models.masters.customers import Customer
from ...models.masters.hotels import Hotel
from ...schemas.financials.reports_schemas import (
    HotelRecapRow,
    OutstandingInvoiceRow,
    ProfitLossRequest,
    ProfitLossRow,
)
from ..bookings.pricing import to_money

ZERO = Decimal("0.00")

PERIOD_DELTAS = {
    ReportPeriod.LAST_MONTH: relativedelta(months=1),
    ReportPeriod.LAST_3_MONTHS: relativedelta(months=3),
    ReportPeriod.LAST_6_MONTHS: relativedelta(months=6),
    ReportPeriod.LAST_YEAR: relativedelta(years=1),
}

ROOM_TYPE_ORDER = {room_type.value: i for i, room_type in enumerate(RoomType)}
MEAL_PLAN_ORDER = {meal_plan.value: i for i, meal_plan in enumerate(MealPlan)}


def resolve_report_window(params: ProfitLossRequest, today: Optional[date] = None) -> Tuple[Optional[date], Optional[date]]:
    start_date, end_date = params.start_date, params.end_date

    if params.period and not start_date and not end_date:
        today = today or datetime.now().date()
        start_date = today - PERIOD_DELTAS[params.period]
        end_date = today

    if start_date and end_date and start_date > end_date:
        raise InvalidInputError("start_date must not be after end_date")

    return start_date, end_date


def build_created_at_filters(start_date: Optional[date], end_date: Optional[date]):
    # both bounds inclusive on the calendar date
    filters = []
    if start_date:
        filters.append(Booking.created_at >= datetime.combine(start_date, time.min))
    if end_date:
        filters.append(Booking.created_at < datetime.combine(
            end_date + timedelta(days=1), time.min))
    return filters


# ----------------- Profit / Loss -----------------
def get_profit_loss_report(db: Session, start_date: Optional[date] = None, end_date: Optional[date] = None) -> List[ProfitLossRow]:
    if start_date and end_date and start_date > end_date:
        raise InvalidInputError("start_date must not be after end_date")

    expense_totals = (
        db.query(
            Expense.booking_id.label("booking_id"),
            func.sum(Expense.amount).label("total_expenses")
        )
        .group_by(Expense.booking_id)
        .subquery()
    )

    rows = (
        db.query(
            Booking.id,
            Booking.booking_number,
            Customer.name.label("customer_name"),
            Booking.total_selling_price,
            Booking.total_cost_price,
            expense_totals.c.total_expenses,
            Booking.created_at,
        )
        .join(Customer, Customer.id == Booking.customer_id)
        .outerjoin(expense_totals, expense_totals.c.booking_id == Booking.id)
        .filter(*build_created_at_filters(start_date, end_date))
        .order_by(Booking.created_at.desc(), Booking.id.desc())
        .all()
    )

    results = []
    for r in rows:
        selling = to_money(r.total_selling_price)
        cost = to_money(r.total_cost_price)
        expenses = to_money(r.total_expenses)
        results.append(ProfitLossRow(
            booking_id=r.id,
            booking_number=r.booking_number,
            customer_name=r.customer_name,
            total_selling_price=selling,
            total_cost_price=cost,
            total_expenses=expenses,
            profit=selling - cost - expenses,
            created_at=r.created_at,
        ))
    return results


# ----------------- Outstanding Invoices -----------------
def get_outstanding_invoices(db: Session, include_partial: bool = False) -> List[OutstandingInvoiceRow]:
    statuses = [PaymentStatus.pending.value]
    if include_partial:
        statuses.append(PaymentStatus.partial.value)

    payment_totals = (
        db.query(
            Payment.booking_id.label("booking_id"),
            func.sum(Payment.amount_in_base).label("paid_amount")
        )
        .group_by(Payment.booking_id)
        .subquery()
    )

    rows = (
        db.query(
            Booking.id,
            Booking.booking_number,
            Customer.name.label("customer_name"),
            Booking.total_selling_price,
            Booking.payment_status,
            payment_totals.c.paid_amount,
            Booking.created_at,
        )
        .join(Customer, Customer.id == Booking.customer_id)
        .outerjoin(payment_totals, payment_totals.c.booking_id == Booking.id)
        .filter(Booking.payment_status.in_(statuses))
        .order_by(Booking.created_at.desc(), Booking.id.desc())
        .all()
    )

    results = []
    for r in rows:
        total = to_money(r.total_selling_price)
        paid = to_money(r.paid_amount)
        results.append(OutstandingInvoiceRow(
            booking_id=r.id,
            booking_number=r.booking_number,
            customer_name=r.customer_name,
            total_amount=total,
            paid_amount=paid,
            outstanding_amount=max(ZERO, total - paid),
            payment_status=r.payment_status,
            created_at=r.created_at,
        ))
    return results


# ----------------- Hotel Recapitulation -----------------
def get_hotel_booking_recapitulation(db: Session, start_date: date, end_date: date) -> List[HotelRecapRow]:
    """
    Group hotel line items whose check-in falls in [start_date, end_date] by
    hotel, room type and meal plan. Cancelled bookings are left out.

    ``line_item_count`` counts the qualifying rows; ``total_nights`` is the
    elapsed room-nights, (check_out - check_in) * rooms summed per group.
    """
    if start_date > end_date:
        raise InvalidInputError("start_date must not be after end_date")

    rows = (
        db.query(
            HotelBookingItem.booking_id,
            HotelBookingItem.hotel_id,
            Hotel.name.label("hotel_name"),
            HotelBookingItem.room_type,
            HotelBookingItem.meal_plan,
            HotelBookingItem.check_in_date,
            HotelBookingItem.check_out_date,
            HotelBookingItem.number_of_rooms,
            HotelBookingItem.cost_price,
            HotelBookingItem.selling_price,
        )
        .join(Hotel, Hotel.id == HotelBookingItem.hotel_id)
        .join(Booking, Booking.id == HotelBookingItem.booking_id)
        .filter(
            HotelBookingItem.check_in_date >= start_date,
            HotelBookingItem.check_in_date <= end_date,
            Booking.status != BookingStatus.cancelled.value,
        )
        .all()
    )

    groups = {}
    for r in rows:
        key = (r.hotel_id, r.room_type, r.meal_plan)
        if key not in groups:
            groups[key] = {
                "hotel_id": r.hotel_id,
                "hotel_name": r.hotel_name,
                "room_type": r.room_type,
                "meal_plan": r.meal_plan,
                "total_rooms": 0,
                "line_item_count": 0,
                "total_nights": 0,
                "total_cost": ZERO,
                "total_revenue": ZERO,
                "bookings": set(),
            }
        group = groups[key]
        group["total_rooms"] += r.number_of_rooms
        group["line_item_count"] += 1
        group["total_nights"] += (r.check_out_date - r.check_in_date).days * r.number_of_rooms
        group["total_cost"] += to_money(r.cost_price)
        group["total_revenue"] += to_money(r.selling_price)
        group["bookings"].add(r.booking_id)

    ordered = sorted(groups.values(), key=lambda g: (
        g["hotel_name"],
        g["hotel_id"],
        ROOM_TYPE_ORDER.get(g["room_type"], len(ROOM_TYPE_ORDER)),
        MEAL_PLAN_ORDER.get(g["meal_plan"], len(MEAL_PLAN_ORDER)),
    ))

    return [
        HotelRecapRow(
            hotel_id=g["hotel_id"],
            hotel_name=g["hotel_name"],
            room_type=g["room_type"],
            meal_plan=g["meal_plan"],
            total_rooms=g["total_rooms"],
            line_item_count=g["line_item_count"],
            total_nights=g["total_nights"],
            total_cost=g["total_cost"],
            total_revenue=g["total_revenue"],
            profit=g["total_revenue"] - g["total_cost"],
            booking_count=len(g["bookings"]),
        )
        for g in ordered
    ]


# ----------------- Export -----------------
EXPORT_COLUMNS = {
    ReportExportType.profit_loss: {
        "booking_number": "Booking Number",
        "customer_name": "Customer",
        "total_selling_price": "Selling Price",
        "total_cost_price": "Cost Price",
        "total_expenses": "Expenses",
        "profit": "Profit",
        "created_at": "Created At",
    },
    ReportExportType.outstanding: {
        "booking_number": "Booking Number",
        "customer_name": "Customer",
        "total_amount": "Total Amount",
        "paid_amount": "Paid Amount",
        "outstanding_amount": "Outstanding Amount",
        "payment_status": "Payment Status",
        "created_at": "Created At",
    },
    ReportExportType.hotel_recap: {
        "hotel_name": "Hotel",
        "room_type": "Room Type",
        "meal_plan": "Meal Plan",
        "total_rooms": "Rooms",
        "line_item_count": "Line Items",
        "total_nights": "Room Nights",
        "total_cost": "Total Cost",
        "total_revenue": "Total Revenue",
        "profit": "Profit",
        "booking_count": "Bookings",
    },
}


def export_report(
    db: Session,
    report_type: ReportExportType,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    include_partial: bool = False,
) -> ExportResponse:
    if report_type == ReportExportType.profit_loss:
        rows = get_profit_loss_report(db, start_date, end_date)
    elif report_type == ReportExportType.outstanding:
        rows = get_outstanding_invoices(db, include_partial)
    else:
        if not start_date or not end_date:
            raise InvalidInputError(
                "start_date and end_date are required for the hotel recapitulation")
        rows = get_hotel_booking_recapitulation(db, start_date, end_date)

    data = [row.model_dump(mode="json") for row in rows]
    return export_to_excel(
        data,
        filename=f"{report_type.value}-report.xlsx",
        column_map=EXPORT_COLUMNS[report_type],
    )
