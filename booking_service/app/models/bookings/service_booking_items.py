from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, func
from sqlalchemy.orm import relationship
from shared.core.database import Base


class ServiceBookingItem(Base):
    __tablename__ = "service_booking_details"

    id = Column(Integer, primary_key=True, autoincrement=True)
    booking_id = Column(Integer, ForeignKey(
        "bookings.id", ondelete="CASCADE"), nullable=False, index=True)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    cost_price = Column(Numeric(10, 2), nullable=False)
    selling_price = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_service_items_quantity"),
    )

    booking = relationship("Booking", back_populates="service_items")
    service = relationship("Service", back_populates="booking_items")
