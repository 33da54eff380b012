# utils/mongodb_conn.py
import logging
from functools import lru_cache

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from utils.config import Settings, get_settings

logger = logging.getLogger(__name__)


class MongodbConnection:
    mongo_client = None
    is_connected = False

    def __init__(self, settings: Settings):
        self.settings = settings
        self.connect_to_database()

    def close_mongo_client(self):
        self.mongo_client.close()

    def get_database(self, database_name=None):
        return self.mongo_client[database_name or self.settings.mongodb_database]

    def connect_to_database(self):
        try:
            self.mongo_client = AsyncIOMotorClient(self.settings.resolved_mongodb_uri)
            self.is_connected = True
            return True
        except PyMongoError as e:
            logger.error("[MongoDB] Error creating client: %s", e)
            self.is_connected = False
            return None

    async def check_connection(self) -> bool:
        if not self.is_connected:
            return False
        try:
            await self.mongo_client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.error("[MongoDB] Ping failed: %s", e)
            return False


@lru_cache(maxsize=1)
def get_mongodb_connection() -> MongodbConnection:
    return MongodbConnection(get_settings())


def get_database():
    """
    FastAPI dependency returning the application database handle.
    """
    return get_mongodb_connection().get_database()
