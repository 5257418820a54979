from typing import List
from pydantic import BaseModel, Field

from igdfare.models.ambulance import VehicleServiceConfig


class TypeOption(BaseModel):
    value: str
    label: str


class VehicleListResponse(BaseModel):
    items: List[VehicleServiceConfig]
    total_count: int = Field(..., alias="totalCount")
    currency: str = "IDR"

    class Config:
        populate_by_name = True


class ErrorResponse(BaseModel):
    detail: str
