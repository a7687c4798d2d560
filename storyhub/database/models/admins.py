import logging
from datetime import datetime
from typing import Optional, Dict, Any
from pymongo.errors import DuplicateKeyError
from ..utils import serialize_document, to_object_id

logger = logging.getLogger(__name__)

class AdminDatabase:
    """Admin account operations"""

    def __init__(self, database):
        self.collection = database.admins

    async def create_admin(self, username: str, password_hash: str) -> Dict[str, Any]:
        """Create a new admin account"""
        if await self.collection.find_one({"username": username}):
            return {"success": False, "message": "Admin already exists"}

        admin_doc = {
            "username": username,
            "password_hash": password_hash,
            "created_at": datetime.utcnow(),
            "last_login": None,
        }

        try:
            result = await self.collection.insert_one(admin_doc)
        except DuplicateKeyError:
            return {"success": False, "message": "Admin already exists"}

        logger.info(f"Created admin account: {username}")
        return {
            "success": True,
            "message": "Admin created successfully",
            "admin_id": str(result.inserted_id)
        }

    async def get_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        return serialize_document(await self.collection.find_one({"username": username}))

    async def get_by_id(self, admin_id: str) -> Optional[Dict[str, Any]]:
        object_id = to_object_id(admin_id)
        if object_id is None:
            return None
        return serialize_document(await self.collection.find_one({"_id": object_id}))

    async def get_first_admin(self) -> Optional[Dict[str, Any]]:
        async for admin in self.collection.find({}).sort("created_at", 1).limit(1):
            return serialize_document(admin)
        return None

    async def update_last_login(self, admin_id: str) -> bool:
        result = await self.collection.update_one(
            {"_id": to_object_id(admin_id)},
            {"$set": {"last_login": datetime.utcnow()}}
        )
        return result.modified_count > 0

    async def update_password(self, admin_id: str, password_hash: str) -> bool:
        result = await self.collection.update_one(
            {"_id": to_object_id(admin_id)},
            {"$set": {"password_hash": password_hash, "updated_at": datetime.utcnow()}}
        )
        return result.matched_count > 0
