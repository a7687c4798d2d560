import logging
from datetime import datetime
from typing import Dict, Any, List, Optional
from ..utils import parse_timestamp, serialize_document, sort_newest_first

logger = logging.getLogger(__name__)

class VisitorDatabase:
    """Visitor session operations (stored in the users collection)"""

    def __init__(self, database):
        self.collection = database.users

    async def touch(self, name: str) -> Dict[str, Any]:
        """Mark a visitor as active, creating the session on first sight"""
        now = datetime.utcnow()
        visitor = await self.collection.find_one({"name": name})
        if visitor:
            await self.collection.update_one({"_id": visitor["_id"]}, {"$set": {"last_active": now}})
            visitor["last_active"] = now
            return serialize_document(visitor)

        visitor_doc = {"name": name, "created_at": now, "last_active": now}
        result = await self.collection.insert_one(visitor_doc)
        visitor_doc["_id"] = result.inserted_id
        logger.info(f"New visitor session: {name}")
        return serialize_document(visitor_doc)

    async def list_visitors(self) -> List[Dict[str, Any]]:
        visitors = []
        async for visitor in self.collection.find({}):
            visitors.append(serialize_document(visitor))
        return sort_newest_first(visitors, "last_active")

    async def active_since(self, cutoff: datetime) -> List[Dict[str, Any]]:
        visitors = await self.list_visitors()
        active = []
        for visitor in visitors:
            last_active = parse_timestamp(visitor.get("last_active"))
            if last_active is not None and last_active > cutoff:
                active.append(visitor)
        return active

    async def create_user(self, user_data: Dict[str, Any]) -> Optional[str]:
        result = await self.collection.insert_one(dict(user_data))
        return str(result.inserted_id)

    async def delete_by_email(self, email: str) -> int:
        result = await self.collection.delete_many({"email": email})
        return result.deleted_count

    async def count_visitors(self) -> int:
        return await self.collection.count_documents({})
