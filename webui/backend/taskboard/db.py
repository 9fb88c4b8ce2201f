"""
MongoDB connection module for the taskboard backend.
The client is created lazily on first use and reused for the life of the process.
"""

import logging
import os
from typing import Any, Optional

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection

from .errors import TaskError

logger = logging.getLogger(__name__)


class Database:
    """Holds the Mongo client and exposes the tasks collection"""

    def __init__(self, uri: str, db_name: str = "taskboard", collection_name: str = "tasks", **client_kwargs: Any):
        self.uri = uri
        self.db_name = db_name
        self.collection_name = collection_name
        # tz_aware so stored datetimes come back as UTC-aware values
        client_kwargs.setdefault("tz_aware", True)
        self.client = AsyncMongoClient(uri, **client_kwargs)
        logger.info(f"MongoDB client created for database {db_name}")

    @property
    def tasks(self) -> AsyncCollection:
        """Tasks collection"""
        return self.client[self.db_name][self.collection_name]

    async def ping(self) -> bool:
        """Check if the server answers"""
        try:
            await self.client.admin.command("ping")
            return True
        except Exception as e:
            logger.error(f"MongoDB not available: {e}")
            return False

    async def close(self):
        await self.client.close()


# Global database instance
_db_instance: Optional[Database] = None


def get_db() -> Database:
    """Get or create global database instance"""
    global _db_instance
    if _db_instance is None:
        uri = os.getenv("MONGODB_URI")
        if not uri:
            raise TaskError.storage("Please define the MONGODB_URI environment variable")
        _db_instance = Database(
            uri,
            db_name=os.getenv("MONGODB_DB", "taskboard"),
            collection_name=os.getenv("MONGODB_COLLECTION", "tasks"),
        )
    return _db_instance


async def close_db():
    """Close the global database instance if it was ever opened"""
    global _db_instance
    if _db_instance is not None:
        await _db_instance.close()
        _db_instance = None
        logger.info("MongoDB client closed")
