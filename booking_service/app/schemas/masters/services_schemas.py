from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class ServiceBase(BaseModel):
    name: str
    cost_price: Decimal = Field(ge=0)
    selling_price_percentage: Decimal = Field(gt=0)


class ServiceCreate(ServiceBase):
    pass


class ServiceUpdate(BaseModel):
    id: int
    name: Optional[str] = None
    cost_price: Optional[Decimal] = Field(default=None, ge=0)
    selling_price_percentage: Optional[Decimal] = Field(default=None, gt=0)


class ServiceOut(ServiceBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ServiceListResponse(BaseModel):
    services: List[ServiceOut]
    total: int
