from ..database.connection import create_indexes
from ..database.models.admins import AdminDatabase
import logging

logger = logging.getLogger(__name__)

REQUIRED_COLLECTIONS = [
    "stories", "comments", "users", "submitted_stories", "admins"
]

async def ensure_collections(database) -> bool:
    """Ensure collections and indexes exist"""
    try:
        collections = await database.list_collection_names()

        for collection in REQUIRED_COLLECTIONS:
            if collection not in collections:
                await database.create_collection(collection)
                logger.info(f"Created collection: {collection}")

        await create_indexes(database)

        logger.info("Database migration completed")
        return True

    except Exception as e:
        logger.error(f"Database migration failed: {e}")
        return False

async def ensure_admin_account(admins: AdminDatabase, username: str, password: str) -> bool:
    """Create the configured admin when it does not exist yet"""
    from ..routers.auth import get_password_hash

    try:
        if await admins.get_by_username(username):
            return False
        result = await admins.create_admin(username, get_password_hash(password))
        return result["success"]
    except Exception as e:
        logger.error(f"Could not create admin account {username}: {e}")
        return False
