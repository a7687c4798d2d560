import logging
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure

logger = logging.getLogger(__name__)

class MongoDB:
    client: Optional[AsyncIOMotorClient] = None
    database: Optional[AsyncIOMotorDatabase] = None

async def connect_to_mongo(mongodb_uri: str, database_name: str) -> MongoDB:
    """Create database connection.

    The client is returned even when the first ping fails so that the API
    can start and serve degraded responses until MongoDB is reachable.
    """
    if not mongodb_uri:
        raise ValueError("MONGODB_URI is not set")

    mongodb = MongoDB()
    mongodb.client = AsyncIOMotorClient(mongodb_uri, serverSelectionTimeoutMS=5000)
    mongodb.database = mongodb.client[database_name]

    try:
        await mongodb.client.admin.command('ping')
        logger.info("Connected to MongoDB successfully!")
        await create_indexes(mongodb.database)
    except ConnectionFailure as e:
        logger.error(f"Failed to connect to MongoDB: {e}")

    return mongodb

async def close_mongo_connection(mongodb: Optional[MongoDB]):
    """Close database connection"""
    if mongodb and mongodb.client:
        mongodb.client.close()
        logger.info("Disconnected from MongoDB")

async def create_indexes(database):
    """Create database indexes"""
    try:
        await database.stories.create_index([("publish_date", -1)])
        await database.stories.create_index([("source_submitted_id", 1)])
        await database.comments.create_index([("story_id", 1), ("created_at", -1)])
        await database.users.create_index([("name", 1)])
        await database.users.create_index([("last_active", -1)])
        await database.submitted_stories.create_index([("status", 1), ("submitted_at", -1)])
        await database.admins.create_index([("username", 1)], unique=True)

        logger.info("Database indexes created successfully")
    except Exception as e:
        logger.warning(f"Could not create indexes: {e}")

async def check_database_health(database) -> bool:
    """Check database connection health"""
    if database is None:
        return False
    try:
        await database.command('ping')
        return True
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        return False
