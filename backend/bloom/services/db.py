# async mongodb client for the backend api
# uses motor for non-blocking operations

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from bloom.config import settings

logger = logging.getLogger(__name__)


class Database:
    """async mongodb connection manager"""

    def __init__(self):
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    async def connect(self):
        """establish connection to mongodb"""
        if self.client is not None:
            return

        logger.info(f"Connecting to MongoDB database: {settings.MONGODB_DATABASE}")
        self.client = AsyncIOMotorClient(settings.MONGODB_URI)
        self.db = self.client[settings.MONGODB_DATABASE]

        # verify connection
        await self.client.admin.command("ping")
        logger.info("MongoDB connection established")

    async def close(self):
        """close mongodb connection"""
        if self.client:
            self.client.close()
            self.client = None
            self.db = None
            logger.info("MongoDB connection closed")

    # collection accessors

    @property
    def practitioners(self):
        return self.db["practitioners"]

    @property
    def clients(self):
        return self.db["clients"]

    @property
    def sessions(self):
        return self.db["sessions"]

    # stats views: materialized per practitioner by the sync worker

    @property
    def weekly_stats(self):
        return self.db["weekly_stats"]

    @property
    def monthly_stats(self):
        return self.db["monthly_stats"]

    @property
    def upcoming_stats(self):
        return self.db["upcoming_stats"]

    @property
    def mhcp_ending_soon(self):
        return self.db["mhcp_ending_soon"]

    @property
    def sync_status(self):
        return self.db["sync_status"]


# singleton instance
db = Database()


async def get_db() -> Database:
    """dependency injection for database access"""
    return db
