from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class HotelBase(BaseModel):
    name: str
    location: str
    cost_price: Decimal = Field(ge=0)
    selling_price_percentage: Decimal = Field(gt=0)


class HotelCreate(HotelBase):
    pass


class HotelUpdate(BaseModel):
    id: int
    name: Optional[str] = None
    location: Optional[str] = None
    cost_price: Optional[Decimal] = Field(default=None, ge=0)
    selling_price_percentage: Optional[Decimal] = Field(default=None, gt=0)


class HotelOut(HotelBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class HotelListResponse(BaseModel):
    hotels: List[HotelOut]
    total: int
