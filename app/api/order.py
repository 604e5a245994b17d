"""
app/api/order.py

Purpose: Customer order endpoints

- POST /new                  multipart order submission with photos
- GET  /my-orders/{user_id}  order history, newest first
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.core.context import AppContext, get_context
from app.schemas.order import OrderListResponse, OrderResponse
from app.services import order_service
from app.services.photo_service import PhotoStore

router = APIRouter()


def get_photo_store(ctx: AppContext = Depends(get_context)) -> PhotoStore:
    return PhotoStore(
        ctx.upload_dir,
        max_photos=ctx.settings.MAX_PHOTOS,
        max_bytes=ctx.settings.MAX_PHOTO_BYTES,
    )


@router.post("/new", response_model=OrderResponse)
async def new_order(
    userId: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    weight: Optional[str] = Form(None),
    date: Optional[str] = Form(None),
    time: Optional[str] = Form(None),
    photos: Optional[List[UploadFile]] = File(None),
    ctx: AppContext = Depends(get_context),
    photo_store: PhotoStore = Depends(get_photo_store),
):
    """
    Places a new pickup order. All fields and at least one photo are required.
    """
    order = await order_service.create_order(
        ctx.orders,
        ctx.users,
        photo_store,
        user_id=userId,
        category=category,
        weight=weight,
        date=date,
        time=time,
        files=photos,
    )
    return {"success": True, "order": order}


@router.get("/my-orders/{user_id}", response_model=OrderListResponse)
async def my_orders(user_id: str, ctx: AppContext = Depends(get_context)):
    orders = await order_service.list_orders(ctx.orders, user_id)
    return {"orders": orders}
