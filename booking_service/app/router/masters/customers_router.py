from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_booking_db as get_db
from shared.helpers.json_response_helper import success_response
from shared.core.exceptions import NotFoundError
from shared.core.schemas import CommonQueryParams
from shared.utils.app_status_code import AppStatusCode
from ...crud.masters import customers_crud as crud
from ...schemas.masters.customers_schemas import (
    CustomerCreate,
    CustomerListResponse,
    CustomerOut,
    CustomerUpdate,
)

router = APIRouter(
    prefix="/api/customers",
    tags=["Customers"],
    dependencies=[Depends(validate_current_token)]
)


# ---------------- List ----------------
@router.get("/all", response_model=CustomerListResponse)
def get_customers_endpoint(
    params: CommonQueryParams = Depends(),
    db: Session = Depends(get_db),
):
    return crud.get_customers(db, params)


# ---------------- Get By Id ----------------
@router.get("/{customer_id}", response_model=CustomerOut)
def get_customer_endpoint(
    customer_id: int,
    db: Session = Depends(get_db),
):
    db_customer = crud.get_customer_by_id(db, customer_id)
    if not db_customer:
        raise NotFoundError(f"Customer with ID {customer_id} not found")
    return db_customer


# ---------------- Create ----------------
@router.post("/", response_model=CustomerOut)
def create_customer_endpoint(
    customer: CustomerCreate,
    db: Session = Depends(get_db),
):
    return crud.create_customer(db, customer)


# ---------------- Update ----------------
@router.put("/", response_model=CustomerOut)
def update_customer_endpoint(
    customer_update: CustomerUpdate,
    db: Session = Depends(get_db),
):
    return crud.update_customer(db, customer_update)


# ---------------- Delete ----------------
@router.delete("/{customer_id}")
def delete_customer_endpoint(
    customer_id: int,
    db: Session = Depends(get_db),
):
    crud.delete_customer(db, customer_id)
    return success_response(
        data={"message": "Customer deleted successfully"},
        message="Customer deleted successfully",
        status_code=AppStatusCode.OPERATION_SUCCESSFUL
    )
