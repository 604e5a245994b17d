"""
Database initialization script for the order API

Run once to verify the connection and create indexes:
    python scripts/init_db.py
"""

import asyncio
import sys
from pathlib import Path
from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load environment variables
load_dotenv()

import logging

from app.core.config import Settings
from app.db.indexes import create_indexes
from app.db.mongo import create_mongo_client, connect_to_mongo, close_mongo_connection
from app.models.order import ORDERS_COLLECTION
from app.models.user import USERS_COLLECTION

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)


async def main() -> int:
    settings = Settings()
    logger.info(f"🔌 Connecting to MongoDB: {settings.MONGODB_DB_NAME}")
    client, db = create_mongo_client(settings)

    try:
        if not await connect_to_mongo(client, settings.MONGODB_DB_NAME):
            logger.error("❌ Could not reach MongoDB")
            return 1

        await create_indexes(db)

        for name in (USERS_COLLECTION, ORDERS_COLLECTION):
            indexes = await db[name].index_information()
            count = await db[name].count_documents({})
            logger.info(f"📋 {name}: {count} documents, indexes={sorted(indexes.keys())}")

        logger.info("✅ Database ready")
        return 0
    finally:
        close_mongo_connection(client)


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
