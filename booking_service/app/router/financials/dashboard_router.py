from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_booking_db as get_db
from ...crud.financials import dashboard_crud
from ...schemas.financials.reports_schemas import DashboardStats

router = APIRouter(prefix="/api/dashboard",
                   tags=["Dashboard"], dependencies=[Depends(validate_current_token)])


@router.get("/stats", response_model=DashboardStats)
def get_stats(db: Session = Depends(get_db)):
    return dashboard_crud.get_dashboard_stats(db)
