from datetime import datetime, date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel
from shared.core.schemas import CommonQueryParams
from ...enum.booking_enum import BookingStatus, MealPlan, PaymentStatus, RoomType


# ----------------- Line requests -----------------
class HotelBookingLine(BaseModel):
    hotel_id: int
    room_type: RoomType
    meal_plan: MealPlan
    check_in_date: date
    check_out_date: date
    number_of_rooms: int


class ServiceBookingLine(BaseModel):
    service_id: int
    quantity: int


# ----------------- Create -----------------
class BookingCreate(BaseModel):
    customer_id: int
    hotel_bookings: List[HotelBookingLine] = []
    services: List[ServiceBookingLine] = []


# ----------------- Status -----------------
class BookingStatusUpdate(BaseModel):
    status: BookingStatus


# ----------------- Out -----------------
class HotelBookingItemOut(BaseModel):
    id: int
    booking_id: int
    hotel_id: int
    room_type: RoomType
    meal_plan: MealPlan
    check_in_date: date
    check_out_date: date
    number_of_rooms: int
    cost_price: Decimal
    selling_price: Decimal
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ServiceBookingItemOut(BaseModel):
    id: int
    booking_id: int
    service_id: int
    quantity: int
    cost_price: Decimal
    selling_price: Decimal
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class BookingOut(BaseModel):
    id: int
    customer_id: int
    booking_number: str
    total_cost_price: Decimal
    total_selling_price: Decimal
    status: BookingStatus
    payment_status: PaymentStatus
    created_by: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class BookingDetailOut(BaseModel):
    booking: BookingOut
    hotel_bookings: List[HotelBookingItemOut]
    service_bookings: List[ServiceBookingItemOut]


class BookingBalanceOut(BaseModel):
    booking_id: int
    total_selling_price: Decimal
    paid_amount: Decimal
    outstanding_amount: Decimal
    payment_status: PaymentStatus


# ----------------- Request -----------------
class BookingRequest(CommonQueryParams):
    status: Optional[BookingStatus] = None
    payment_status: Optional[PaymentStatus] = None


# ----------------- List Response -----------------
class BookingListResponse(BaseModel):
    bookings: List[BookingOut]
    total: int

    model_config = {"from_attributes": True}
