import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shared.core.exceptions import ConflictError, InvalidInputError, NotFoundError, RateNotFoundError
from ...enum.booking_enum import Currency
from ...models.financials.exchange_rates import ExchangeRate
from ...schemas.financials.exchange_rates_schemas import ExchangeRateCreate, ExchangeRateUpdate
from ..bookings.pricing import to_money

logger = logging.getLogger(__name__)


def _currency_code(currency) -> str:
    return Currency(currency).value


# ----------------- Lookups -----------------
def get_exchange_rates(db: Session) -> List[ExchangeRate]:
    return (
        db.query(ExchangeRate)
        .order_by(ExchangeRate.from_currency.asc(), ExchangeRate.to_currency.asc())
        .all()
    )


def get_exchange_rate_by_id(db: Session, rate_id: int) -> Optional[ExchangeRate]:
    return db.query(ExchangeRate).filter(ExchangeRate.id == rate_id).first()


def get_rate(db: Session, from_currency, to_currency) -> Optional[ExchangeRate]:
    return db.query(ExchangeRate).filter(
        ExchangeRate.from_currency == _currency_code(from_currency),
        ExchangeRate.to_currency == _currency_code(to_currency)
    ).first()


# ----------------- Conversion -----------------
def convert(db: Session, amount, from_currency, to_currency) -> Decimal:
    """
    Convert ``amount`` using the rate stored for the exact ordered pair.

    Same-currency conversion is the identity and never touches the rate table.
    A missing pair raises RateNotFoundError even when the reverse pair exists.
    """
    amount = Decimal(str(amount))
    if _currency_code(from_currency) == _currency_code(to_currency):
        return amount

    exchange_rate = get_rate(db, from_currency, to_currency)
    if not exchange_rate:
        raise RateNotFoundError(_currency_code(from_currency), _currency_code(to_currency))

    return to_money(amount * Decimal(str(exchange_rate.rate)))


# ----------------- Create -----------------
def create_exchange_rate(db: Session, request: ExchangeRateCreate) -> ExchangeRate:
    from_code = _currency_code(request.from_currency)
    to_code = _currency_code(request.to_currency)

    if from_code == to_code:
        raise InvalidInputError("Exchange rate currencies must differ")
    if request.rate <= 0:
        raise InvalidInputError("Exchange rate must be positive")

    if get_rate(db, from_code, to_code):
        raise ConflictError(
            f"Exchange rate already exists for {from_code} to {to_code}")

    db_rate = ExchangeRate(
        from_currency=from_code,
        to_currency=to_code,
        rate=request.rate
    )
    db.add(db_rate)
    try:
        db.commit()
    except IntegrityError:
        # lost a race against a concurrent insert of the same pair
        db.rollback()
        raise ConflictError(
            f"Exchange rate already exists for {from_code} to {to_code}")
    db.refresh(db_rate)
    logger.info("Exchange rate %s->%s created at %s",
                from_code, to_code, request.rate)
    return db_rate


# ----------------- Update -----------------
def update_exchange_rate(db: Session, request: ExchangeRateUpdate) -> ExchangeRate:
    if request.rate <= 0:
        raise InvalidInputError("Exchange rate must be positive")

    db_rate = get_exchange_rate_by_id(db, request.id)
    if not db_rate:
        raise NotFoundError(
            f"Currency exchange rate with id {request.id} not found")

    db_rate.rate = request.rate
    db.commit()
    db.refresh(db_rate)
    return db_rate


# ----------------- Delete -----------------
def delete_exchange_rate(db: Session, rate_id: int) -> bool:
    db_rate = get_exchange_rate_by_id(db, rate_id)
    if not db_rate:
        raise NotFoundError(
            f"Currency exchange rate with id {rate_id} not found")

    db.delete(db_rate)
    db.commit()
    return True
