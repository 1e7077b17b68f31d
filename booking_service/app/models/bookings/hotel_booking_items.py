from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, Integer, Numeric, String, func
from sqlalchemy.orm import relationship
from shared.core.database import Base


class HotelBookingItem(Base):
    __tablename__ = "hotel_booking_details"

    id = Column(Integer, primary_key=True, autoincrement=True)
    booking_id = Column(Integer, ForeignKey(
        "bookings.id", ondelete="CASCADE"), nullable=False, index=True)
    hotel_id = Column(Integer, ForeignKey("hotels.id"), nullable=False)
    room_type = Column(String(16), nullable=False)
    meal_plan = Column(String(16), nullable=False)
    check_in_date = Column(Date, nullable=False)
    check_out_date = Column(Date, nullable=False)
    number_of_rooms = Column(Integer, nullable=False)
    cost_price = Column(Numeric(10, 2), nullable=False)
    selling_price = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("check_out_date > check_in_date",
                        name="ck_hotel_items_date_order"),
        CheckConstraint("number_of_rooms > 0",
                        name="ck_hotel_items_rooms"),
    )

    booking = relationship("Booking", back_populates="hotel_items")
    hotel = relationship("Hotel", back_populates="booking_items")
