from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, String, func
from sqlalchemy.orm import relationship
from shared.core.database import Base
from ...enum.booking_enum import BookingStatus, PaymentStatus


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)
    booking_number = Column(String(32), nullable=False, unique=True)
    total_cost_price = Column(Numeric(10, 2), nullable=False)
    total_selling_price = Column(Numeric(10, 2), nullable=False)
    status = Column(String(16), nullable=False,
                    default=BookingStatus.draft.value)
    payment_status = Column(String(16), nullable=False,
                            default=PaymentStatus.pending.value)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("total_cost_price >= 0",
                        name="ck_bookings_total_cost_price"),
        CheckConstraint("total_selling_price >= 0",
                        name="ck_bookings_total_selling_price"),
    )

    customer = relationship("Customer", back_populates="bookings")
    creator = relationship("Users", back_populates="bookings")
    hotel_items = relationship(
        "HotelBookingItem", back_populates="booking", cascade="all, delete-orphan",
        order_by="HotelBookingItem.id")
    service_items = relationship(
        "ServiceBookingItem", back_populates="booking", cascade="all, delete-orphan",
        order_by="ServiceBookingItem.id")
    payments = relationship(
        "Payment", back_populates="booking", cascade="all, delete-orphan")
    expenses = relationship(
        "Expense", back_populates="booking", cascade="all, delete-orphan")
