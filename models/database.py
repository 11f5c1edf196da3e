"""Database connection setup."""

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING
from typing import Optional
from config.settings import settings
from utils.logger import setup_logger

logger = setup_logger(__name__)


class Database:
    """Database connection manager."""

    client: Optional[AsyncIOMotorClient] = None


db = Database()


async def connect_to_mongo():
    """Create database connection."""
    # tz_aware so exercise dates come back as UTC-aware datetimes
    db.client = AsyncIOMotorClient(settings.mongodb_url, tz_aware=True)
    logger.info(f"Connected to MongoDB: {settings.mongodb_url}")


async def close_mongo_connection():
    """Close database connection."""
    if db.client:
        db.client.close()
        db.client = None
        logger.info("Disconnected from MongoDB")


async def init_mongo():
    """Connect to MongoDB and create the users collection indexes."""
    await connect_to_mongo()

    users_collection = get_users_collection()
    await users_collection.create_index([("username", ASCENDING)], unique=True)

    logger.info("MongoDB initialized: users collection ready")


def get_database():
    """Get the database named in the MongoDB URL path."""
    return db.client.get_default_database(default="exercise_tracker")


def get_users_collection():
    """Get users collection."""
    return get_database().users
