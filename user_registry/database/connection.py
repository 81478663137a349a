import logging

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

class MongoConnection:
    """Owns the MongoClient shared by all store operations"""

    def __init__(self, uri: str = "mongodb://localhost:27017", db_name: str = "user_registry", timeout_ms: int = 5000):
        self.uri = uri
        self.db_name = db_name
        # MongoClient connects lazily, nothing blocks here
        self.client = MongoClient(uri, serverSelectionTimeoutMS=timeout_ms, tz_aware=True)
        self.db = self.client[db_name]

    def ping(self) -> bool:
        """Check the server is reachable, logging the outcome"""
        try:
            self.client.admin.command("ping")
            logger.info("Connected to MongoDB database %s", self.db_name)
            return True
        except PyMongoError as e:
            logger.error("MongoDB connection error: %s", e)
            return False

    def get_collection(self, name: str) -> Collection:
        """Return a collection from the configured database"""
        return self.db[name]

    def close(self):
        """Close database connection"""
        if self.client:
            self.client.close()
            logger.info("MongoDB connection closed")
