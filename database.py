"""
Database connection

One MongoClient per process. The Database object is built at startup and
handed to the app, which passes its collection handle into each request.
"""

import structlog
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from config import Settings

logger = structlog.get_logger()


class ConnectionFailedError(Exception):
    """Raised when the initial connection to MongoDB cannot be made."""


class Database:
    def __init__(self, client, collection):
        self.client = client
        self.collection = collection

    @property
    def name(self) -> str:
        return self.collection.database.name

    def ping(self) -> bool:
        try:
            self.client.admin.command("ping")
        except PyMongoError as e:
            logger.warning("database_ping_failed", error=str(e))
            return False
        return True

    def close(self) -> None:
        self.client.close()
        logger.info("database_closed")


def connect(settings: Settings) -> Database:
    try:
        client = MongoClient(settings.mongo_uri, timeoutMS=int(settings.request_timeout * 1000))
        client.admin.command("ping")
    except PyMongoError as e:
        logger.error("database_connect_failed", error=str(e))
        raise ConnectionFailedError(str(e)) from e

    collection = client[settings.database_name][settings.collection_name]
    logger.info("database_connected", database=settings.database_name, collection=settings.collection_name)
    return Database(client, collection)
