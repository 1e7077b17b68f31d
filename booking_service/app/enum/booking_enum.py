from enum import Enum


class Currency(str, Enum):
    SAR = "SAR"
    USD = "USD"
    IDR = "IDR"


class RoomType(str, Enum):
    single = "single"
    double = "double"
    triple = "triple"
    quad = "quad"


class MealPlan(str, Enum):
    no_meal = "no_meal"
    breakfast = "breakfast"
    halfboard = "halfboard"
    fullboard = "fullboard"


class BookingStatus(str, Enum):
    draft = "draft"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"


class PaymentStatus(str, Enum):
    pending = "pending"
    partial = "partial"
    paid = "paid"
