"""
app/db/indexes.py

Purpose: Database index management

- Unique index on users.mobile (one record per number)
- Compound index for a customer's newest-first order history
"""

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from app.models.order import ORDERS_COLLECTION
from app.models.user import USERS_COLLECTION
from app.core.logging import get_logger

logger = get_logger(__name__)


async def create_indexes(database: AsyncIOMotorDatabase):
    """
    Creates all necessary database indexes.
    This function is idempotent - safe to run multiple times.
    """
    try:
        users = database[USERS_COLLECTION]
        orders = database[ORDERS_COLLECTION]

        await users.create_index([("mobile", ASCENDING)], unique=True, name="mobile_unique")
        logger.debug("Created unique index on users.mobile")

        await orders.create_index(
            [("customer", ASCENDING), ("_id", DESCENDING)],
            name="customer_orders_idx"
        )
        logger.debug("Created compound index on orders.customer + _id")

        await orders.create_index("status", name="order_status_idx")
        logger.debug("Created index on orders.status")

        logger.info("✅ All database indexes created successfully")

    except Exception as e:
        logger.error(f"Failed to create indexes: {str(e)}", exc_info=True)
        raise


if __name__ == "__main__":
    """
    Run this script directly to create indexes manually.
    """
    import asyncio
    from app.core.config import settings
    from app.db.mongo import create_mongo_client, close_mongo_connection

    async def main():
        client, database = create_mongo_client(settings)
        await create_indexes(database)
        close_mongo_connection(client)

    asyncio.run(main())
