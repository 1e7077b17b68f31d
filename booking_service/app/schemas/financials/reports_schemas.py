from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ...enum.booking_enum import MealPlan, PaymentStatus, RoomType
from ...enum.report_enum import ReportPeriod


class ProfitLossRequest(EmptyStringModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    # a preset window ending today; explicit dates win
    period: Optional[ReportPeriod] = None


class OutstandingInvoicesRequest(BaseModel):
    include_partial: bool = False


class HotelRecapRequest(BaseModel):
    start_date: date
    end_date: date


class ProfitLossRow(BaseModel):
    booking_id: int
    booking_number: str
    customer_name: str
    total_selling_price: Decimal
    total_cost_price: Decimal
    total_expenses: Decimal
    profit: Decimal
    created_at: Optional[datetime] = None


class OutstandingInvoiceRow(BaseModel):
    booking_id: int
    booking_number: str
    customer_name: str
    total_amount: Decimal
    paid_amount: Decimal
    outstanding_amount: Decimal
    payment_status: PaymentStatus
    created_at: Optional[datetime] = None


class HotelRecapRow(BaseModel):
    hotel_id: int
    hotel_name: str
    room_type: RoomType
    meal_plan: MealPlan
    total_rooms: int
    line_item_count: int
    total_nights: int
    total_cost: Decimal
    total_revenue: Decimal
    profit: Decimal
    booking_count: int


class DashboardStats(BaseModel):
    customer_count: int
    booking_count: int
    total_profit: Decimal
    outstanding_payments: Decimal
