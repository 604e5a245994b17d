"""
app/services/order_service.py

Purpose: Customer order workflow

- Validates and creates pickup orders with their photos
- Lists a customer's order history, newest first
"""

from typing import Any, Dict, List, Optional, Sequence

from fastapi import UploadFile
from pymongo import DESCENDING

from app.core.exceptions import ResourceNotFoundError, ValidationError
from app.core.logging import get_logger, LogContext
from app.models.order import build_order_document
from app.services.photo_service import PhotoStore
from utils.validation_utils import is_blank, parse_object_id, parse_weight

logger = get_logger(__name__)


async def create_order(
    orders,
    users,
    photo_store: PhotoStore,
    user_id: Optional[str],
    category: Optional[str],
    weight: Optional[str],
    date: Optional[str],
    time: Optional[str],
    files: Optional[Sequence[UploadFile]],
) -> Dict[str, Any]:
    """
    Creates a new order in the Pending state.

    Args:
        orders: orders collection
        users: users collection (owner lookup)
        photo_store: Where uploaded photos are written
        user_id .. time: Raw form fields
        files: Uploaded photos (1 to the configured maximum)

    Returns:
        The inserted order document

    Raises:
        ValidationError: Missing fields, no photos, bad weight or user id
        UploadLimitError: Too many or oversized photos
        ResourceNotFoundError: The user does not exist
    """
    files = [f for f in (files or []) if getattr(f, "filename", None)]
    photo_store.check_count(files)

    if any(is_blank(v) for v in (user_id, category, weight, date, time)) or not files:
        raise ValidationError("All fields required")

    amount = parse_weight(weight)
    if amount is None:
        raise ValidationError("Weight must be a number")

    customer = parse_object_id(user_id)
    if customer is None:
        raise ValidationError("Invalid user id")

    with LogContext(user_id=user_id):
        owner = await users.find_one({"_id": customer}, {"_id": 1})
        if owner is None:
            raise ResourceNotFoundError("User not found")

        photos = await photo_store.save_all(files)
        try:
            order = build_order_document(customer, category, amount, date, time, photos)
            result = await orders.insert_one(order)
        except Exception:
            photo_store.discard(photos)
            raise

        order["_id"] = result.inserted_id
        logger.info(
            f"Order created with {len(photos)} photo(s)",
            extra={"order_id": str(result.inserted_id)}
        )
        return order


async def list_orders(orders, user_id: str) -> List[Dict[str, Any]]:
    """
    Returns all orders of a customer, newest first.

    Raises:
        ValidationError: If user_id is not a valid identifier
    """
    customer = parse_object_id(user_id)
    if customer is None:
        raise ValidationError("Invalid user id")

    cursor = orders.find({"customer": customer}).sort("_id", DESCENDING)
    return await cursor.to_list(length=None)
