from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, ConfigurationError

from glossary_bot.logger import logger
from glossary_bot.constants import (
    DEFAULT_MONGO_DB_NAME,
    MONGODB_SERVER_SELECTION_TIMEOUT_MS,
    TERMS_COLLECTION,
)


def connect(mongo_url: str | None, db_name: str | None = None) -> Database:
    """
    Connect to MongoDB and verify the server is reachable.
    Raises on any connection problem; callers treat this as fatal.
    """
    try:
        if not mongo_url:
            raise ValueError("MONGO_URL environment variable is not set")

        client = MongoClient(mongo_url, serverSelectionTimeoutMS=MONGODB_SERVER_SELECTION_TIMEOUT_MS)
        # Test the connection
        client.admin.command("ping")
        db = client[db_name or DEFAULT_MONGO_DB_NAME]
        logger.info("MongoDB connection established successfully")
        return db
    except (ConnectionFailure, ConfigurationError, ValueError) as e:
        logger.critical("Failed to connect to MongoDB: %s", e)
        raise
    except Exception as e:
        logger.critical("Unexpected error connecting to MongoDB: %s", e)
        raise


def ensure_terms_index(db: Database) -> None:
    """Case-insensitive uniqueness of terms is enforced on the folded key."""
    try:
        db[TERMS_COLLECTION].create_index("term_key", unique=True)
        logger.debug("Terms collection index created/verified")
    except Exception as e:
        logger.warning("Could not create index on terms collection: %s", e)
