from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_booking_db as get_db
from shared.core.schemas import ExportResponse
from ...crud.financials import reports_crud as crud
from ...enum.report_enum import ReportExportType
from ...schemas.financials.reports_schemas import (
    HotelRecapRequest,
    HotelRecapRow,
    OutstandingInvoiceRow,
    OutstandingInvoicesRequest,
    ProfitLossRequest,
    ProfitLossRow,
)

router = APIRouter(
    prefix="/api/reports",
    tags=["Reports"],
    dependencies=[Depends(validate_current_token)]
)


@router.get("/profit-loss", response_model=List[ProfitLossRow])
def profit_loss_report(
    params: ProfitLossRequest = Depends(),
    db: Session = Depends(get_db),
):
    start_date, end_date = crud.resolve_report_window(params)
    return crud.get_profit_loss_report(db, start_date, end_date)


@router.get("/outstanding-invoices", response_model=List[OutstandingInvoiceRow])
def outstanding_invoices_report(
    params: OutstandingInvoicesRequest = Depends(),
    db: Session = Depends(get_db),
):
    return crud.get_outstanding_invoices(db, params.include_partial)


@router.get("/hotel-recapitulation", response_model=List[HotelRecapRow])
def hotel_recapitulation_report(
    params: HotelRecapRequest = Depends(),
    db: Session = Depends(get_db),
):
    return crud.get_hotel_booking_recapitulation(db, params.start_date, params.end_date)


# ---------------- Export ----------------
@router.get("/export", response_model=ExportResponse)
def export_report_endpoint(
    report_type: ReportExportType = Query(..., alias="type"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    include_partial: bool = Query(False),
    db: Session = Depends(get_db),
):
    return crud.export_report(db, report_type, start_date, end_date, include_partial)
