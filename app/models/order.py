"""
app/models/order.py

Purpose: Order document model

- One document per submitted pickup order
- References its owner through "customer" (users._id)
- Status lifecycle: Pending -> Scheduled / Completed / Rejected
"""

from enum import Enum
from typing import Any, Dict, List

from bson import ObjectId

ORDERS_COLLECTION = "orders"


class OrderStatus(str, Enum):
    PENDING = "Pending"
    SCHEDULED = "Scheduled"
    COMPLETED = "Completed"
    REJECTED = "Rejected"

    @classmethod
    def values(cls) -> List[str]:
        return [status.value for status in cls]


def build_order_document(
    customer: ObjectId,
    category: str,
    weight: float,
    date: str,
    time: str,
    photos: List[str],
) -> Dict[str, Any]:
    """Creates a new order document in its initial state."""
    return {
        "customer": customer,
        "category": category,
        "weight": weight,
        "photos": list(photos),
        "date": date,
        "time": time,
        "status": OrderStatus.PENDING.value,
    }
