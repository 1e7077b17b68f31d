from sqlalchemy import CheckConstraint, Column, DateTime, Integer, Numeric, String, UniqueConstraint, func
from shared.core.database import Base


class ExchangeRate(Base):
    __tablename__ = "currency_exchange_rates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    from_currency = Column(String(8), nullable=False)
    to_currency = Column(String(8), nullable=False)
    rate = Column(Numeric(15, 6), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        # one active rate per ordered pair; the reverse pair is its own row
        UniqueConstraint("from_currency", "to_currency",
                         name="uq_exchange_rate_pair"),
        CheckConstraint("rate > 0", name="ck_exchange_rate_positive"),
    )
