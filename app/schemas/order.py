"""
app/schemas/order.py

Purpose: Order response schemas

- Renders Mongo documents as JSON (ObjectId -> hex string, _id kept)
- Plain listing vs. admin listing with the owner's mobile expanded
"""

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from typing import Annotated, List, Optional

from app.models.order import OrderStatus

ObjectIdStr = Annotated[str, BeforeValidator(str)]


class CustomerRef(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: ObjectIdStr = Field(..., alias="_id")
    mobile: Optional[str] = None


class OrderOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: ObjectIdStr = Field(..., alias="_id")
    customer: ObjectIdStr
    category: str
    weight: float
    photos: List[str] = Field(default_factory=list)
    date: str
    time: str
    status: str = OrderStatus.PENDING.value


class AdminOrderOut(OrderOut):
    customer: Optional[CustomerRef] = None


class OrderResponse(BaseModel):
    success: bool = True
    order: OrderOut


class OrderListResponse(BaseModel):
    orders: List[OrderOut]


class AdminOrderListResponse(BaseModel):
    orders: List[AdminOrderOut]


class StatusUpdateRequest(BaseModel):
    status: Optional[str] = Field(None, description="One of Pending, Scheduled, Completed, Rejected")

    class Config:
        json_schema_extra = {"example": {"status": "Scheduled"}}
