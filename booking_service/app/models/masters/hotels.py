from sqlalchemy import CheckConstraint, Column, DateTime, Integer, Numeric, String, func
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Hotel(Base):
    __tablename__ = "hotels"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    location = Column(String(200), nullable=False)
    # price of one room for the stay; selling adds the markup percentage
    cost_price = Column(Numeric(10, 2), nullable=False)
    selling_price_percentage = Column(Numeric(5, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("cost_price >= 0", name="ck_hotels_cost_price"),
    )

    booking_items = relationship("HotelBookingItem", back_populates="hotel")
