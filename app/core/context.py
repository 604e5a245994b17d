"""
app/core/context.py

Purpose: Application context

- Bundles settings, Mongo handles, collections, upload dir and SMS sender
- Built once in the application lifespan and kept on app.state
- Injected into route handlers with Depends(get_context)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from fastapi import Request
from pymongo.errors import PyMongoError

from app.core.config import Settings
from app.core.logging import get_logger
from app.db.indexes import create_indexes
from app.db.mongo import create_mongo_client, connect_to_mongo, close_mongo_connection
from app.models.order import ORDERS_COLLECTION
from app.models.user import USERS_COLLECTION
from app.services.sms_service import SmsService

logger = get_logger(__name__)


@dataclass
class AppContext:
    settings: Settings
    users: Any
    orders: Any
    upload_dir: Path
    sms: SmsService
    client: Optional[Any] = None
    database: Optional[Any] = None
    db_connected: bool = False

    async def close(self):
        close_mongo_connection(self.client)


async def build_context(settings: Settings) -> AppContext:
    """
    Creates the context for a running application.

    A database that cannot be reached is logged and the context is still
    returned; requests that need the database then fail individually.
    """
    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)

    client, database = create_mongo_client(settings)
    connected = await connect_to_mongo(client, settings.MONGODB_DB_NAME)

    if connected:
        try:
            await create_indexes(database)
        except PyMongoError:
            logger.warning("⚠️ Continuing without database indexes")
    else:
        logger.warning("⚠️ Starting without a database connection")

    return AppContext(
        settings=settings,
        users=database[USERS_COLLECTION],
        orders=database[ORDERS_COLLECTION],
        upload_dir=upload_dir,
        sms=SmsService(settings),
        client=client,
        database=database,
        db_connected=connected,
    )


def get_context(request: Request) -> AppContext:
    """FastAPI dependency returning the context built at startup."""
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise RuntimeError("Application context not initialized")
    return context
