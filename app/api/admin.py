"""
app/api/admin.py

Purpose: Admin order endpoints

- GET  /orders                   all orders with the owner's mobile
- POST /order/{order_id}/status  change an order's status
"""

from fastapi import APIRouter, Depends

from app.core.context import AppContext, get_context
from app.schemas.order import AdminOrderListResponse, OrderResponse, StatusUpdateRequest
from app.services import admin_service

router = APIRouter()


@router.get("/orders", response_model=AdminOrderListResponse)
async def all_orders(ctx: AppContext = Depends(get_context)):
    orders = await admin_service.list_all_orders(ctx.orders, ctx.users)
    return {"orders": orders}


@router.post("/order/{order_id}/status", response_model=OrderResponse)
async def update_status(
    order_id: str,
    body: StatusUpdateRequest,
    ctx: AppContext = Depends(get_context),
):
    order = await admin_service.set_order_status(ctx.orders, order_id, body.status)
    return {"success": True, "order": order}
