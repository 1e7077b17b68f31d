from sqlalchemy import Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    address = Column(String, nullable=False)
    phone = Column(String(32), nullable=False)
    email = Column(String(200), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    bookings = relationship("Booking", back_populates="customer")
