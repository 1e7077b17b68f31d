from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, EmailStr


class CustomerBase(BaseModel):
    name: str
    address: str
    phone: str
    email: EmailStr


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(BaseModel):
    id: int
    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None


class CustomerOut(CustomerBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CustomerListResponse(BaseModel):
    customers: List[CustomerOut]
    total: int
