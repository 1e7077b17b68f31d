from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_booking_db as get_db
from shared.helpers.json_response_helper import success_response
from shared.core.exceptions import NotFoundError
from shared.core.schemas import CommonQueryParams
from shared.utils.app_status_code import AppStatusCode
from ...crud.masters import services_crud as crud
from ...schemas.masters.services_schemas import (
    ServiceCreate,
    ServiceListResponse,
    ServiceOut,
    ServiceUpdate,
)

router = APIRouter(
    prefix="/api/services",
    tags=["Services"],
    dependencies=[Depends(validate_current_token)]
)


# ---------------- List ----------------
@router.get("/all", response_model=ServiceListResponse)
def get_services_endpoint(
    params: CommonQueryParams = Depends(),
    db: Session = Depends(get_db),
):
    return crud.get_services(db, params)


# ---------------- Get By Id ----------------
@router.get("/{service_id}", response_model=ServiceOut)
def get_service_endpoint(
    service_id: int,
    db: Session = Depends(get_db),
):
    db_service = crud.get_service_by_id(db, service_id)
    if not db_service:
        raise NotFoundError(f"Service with ID {service_id} not found")
    return db_service


# ---------------- Create ----------------
@router.post("/", response_model=ServiceOut)
def create_service_endpoint(
    service: ServiceCreate,
    db: Session = Depends(get_db),
):
    return crud.create_service(db, service)


# ---------------- Update ----------------
@router.put("/", response_model=ServiceOut)
def update_service_endpoint(
    service_update: ServiceUpdate,
    db: Session = Depends(get_db),
):
    return crud.update_service(db, service_update)


# ---------------- Delete ----------------
@router.delete("/{service_id}")
def delete_service_endpoint(
    service_id: int,
    db: Session = Depends(get_db),
):
    crud.delete_service(db, service_id)
    return success_response(
        data={"message": "Service deleted successfully"},
        message="Service deleted successfully",
        status_code=AppStatusCode.OPERATION_SUCCESSFUL
    )
