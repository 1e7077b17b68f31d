from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_booking_db as get_db
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ...crud.financials import exchange_rates_crud as crud
from ...schemas.financials.exchange_rates_schemas import (
    ConversionOut,
    ConversionRequest,
    ExchangeRateCreate,
    ExchangeRateOut,
    ExchangeRateUpdate,
)

router = APIRouter(
    prefix="/api/exchange-rates",
    tags=["Exchange Rates"],
    dependencies=[Depends(validate_current_token)]
)


@router.get("/all", response_model=List[ExchangeRateOut])
def get_exchange_rates_endpoint(db: Session = Depends(get_db)):
    return crud.get_exchange_rates(db)


@router.post("/", response_model=ExchangeRateOut)
def create_exchange_rate_endpoint(
    exchange_rate: ExchangeRateCreate,
    db: Session = Depends(get_db),
):
    return crud.create_exchange_rate(db, exchange_rate)


@router.put("/", response_model=ExchangeRateOut)
def update_exchange_rate_endpoint(
    exchange_rate: ExchangeRateUpdate,
    db: Session = Depends(get_db),
):
    return crud.update_exchange_rate(db, exchange_rate)


@router.delete("/{rate_id}")
def delete_exchange_rate_endpoint(
    rate_id: int,
    db: Session = Depends(get_db),
):
    crud.delete_exchange_rate(db, rate_id)
    return success_response(
        data={"message": "Exchange rate deleted successfully"},
        message="Exchange rate deleted successfully",
        status_code=AppStatusCode.OPERATION_SUCCESSFUL
    )


# ---------------- Convert ----------------
@router.post("/convert", response_model=ConversionOut)
def convert_amount_endpoint(
    request: ConversionRequest,
    db: Session = Depends(get_db),
):
    converted = crud.convert(db, request.amount, request.from_currency, request.to_currency)
    return ConversionOut(
        amount=request.amount,
        from_currency=request.from_currency,
        to_currency=request.to_currency,
        converted_amount=converted,
    )
