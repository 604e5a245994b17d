"""
app/services/admin_service.py

Purpose: Admin order management

- Lists every order with the owner's mobile number attached
- Changes an order's status (validated against OrderStatus)
"""

from typing import Any, Dict, List, Optional

from pymongo import ReturnDocument

from app.core.exceptions import ResourceNotFoundError, ValidationError
from app.core.logging import get_logger, LogContext
from app.models.order import OrderStatus
from utils.validation_utils import parse_object_id

logger = get_logger(__name__)


async def list_all_orders(orders, users) -> List[Dict[str, Any]]:
    """
    Returns all orders with "customer" expanded to {"_id", "mobile"}.
    Orders whose owner no longer exists get customer = None.
    """
    all_orders = await orders.find({}).to_list(length=None)

    customer_ids = list({o["customer"] for o in all_orders if o.get("customer") is not None})
    owners = {}
    if customer_ids:
        found = await users.find({"_id": {"$in": customer_ids}}, {"mobile": 1}).to_list(length=None)
        owners = {u["_id"]: {"_id": u["_id"], "mobile": u.get("mobile")} for u in found}

    for order in all_orders:
        order["customer"] = owners.get(order.get("customer"))

    return all_orders


async def set_order_status(orders, order_id: str, status: Optional[str]) -> Dict[str, Any]:
    """
    Overwrites an order's status.

    Returns:
        The updated order document

    Raises:
        ValidationError: If status is not one of the known values
        ResourceNotFoundError: If no order has this id
    """
    if status not in OrderStatus.values():
        raise ValidationError(
            "Invalid status value",
            details={"allowed": OrderStatus.values()}
        )

    with LogContext(order_id=order_id):
        oid = parse_object_id(order_id)
        if oid is None:
            raise ResourceNotFoundError("Order not found")

        order = await orders.find_one_and_update(
            {"_id": oid},
            {"$set": {"status": status}},
            return_document=ReturnDocument.AFTER,
        )
        if order is None:
            raise ResourceNotFoundError("Order not found")

        logger.info(f"Order status set to {status}")
        return order
