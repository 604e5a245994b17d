"""
app/db/mongo.py

Purpose: MongoDB connection setup

- Creates the Motor client for the configured database
- Verifies connectivity with a ping (failure is reported, not raised)
- Health checks and connection shutdown
- No module-level client: callers own the handles they get back
"""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError
from typing import Optional, Tuple

from app.core.config import Settings
from app.core.logging import get_logger

logger = get_logger(__name__)


def create_mongo_client(settings: Settings) -> Tuple[AsyncIOMotorClient, AsyncIOMotorDatabase]:
    """
    Builds the Motor client and database handle.
    Motor connects lazily, so this never blocks or fails on a down server.
    """
    # Fix URL encoding for special characters
    mongodb_url = settings.MONGODB_URL.replace("%%", "%25")

    client = AsyncIOMotorClient(
        mongodb_url,
        tz_aware=True,
        serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
    )
    database = client[settings.MONGODB_DB_NAME]
    return client, database


async def connect_to_mongo(client: AsyncIOMotorClient, db_name: str) -> bool:
    """
    Verifies the connection during application startup.

    Returns:
        True if the server answered, False otherwise. The error is
        logged and the application keeps running without a database.
    """
    try:
        logger.info(f"Connecting to MongoDB database '{db_name}'")
        await client.admin.command("ping")
        logger.info(f"✅ Successfully connected to MongoDB: {db_name}")
        return True

    except PyMongoError as e:
        logger.error(f"Failed to connect to MongoDB: {e}")
        return False


def close_mongo_connection(client: Optional[AsyncIOMotorClient]):
    """
    Closes the MongoDB connection.
    Called during application shutdown.
    """
    if client is not None:
        logger.info("Closing MongoDB connection")
        client.close()


async def check_database_health(client: Optional[AsyncIOMotorClient]) -> bool:
    """
    Checks if the database connection is healthy.

    Returns:
        True if connection is healthy, False otherwise
    """
    try:
        if client is None:
            logger.error("MongoDB client not initialized")
            return False

        await client.admin.command("ping")
        return True

    except PyMongoError as e:
        logger.error(f"Database health check failed: {str(e)}")
        return False
