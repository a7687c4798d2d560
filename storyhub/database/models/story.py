import logging
from datetime import datetime
from typing import Dict, Any, List, Optional
from ..utils import serialize_document, sort_newest_first, strip_ids, to_object_id

logger = logging.getLogger(__name__)

class StoryDatabase:
    """Published story database operations"""

    def __init__(self, database):
        self.collection = database.stories

    async def list_stories(self) -> List[Dict[str, Any]]:
        """Get every published story, newest first.

        Ordering is done here rather than in the query: old records carry
        publish_date as a string and newer ones as a datetime.
        """
        stories = []
        async for story in self.collection.find({}):
            stories.append(serialize_document(story))
        return sort_newest_first(stories, "publish_date", "created_at")

    async def get_story(self, story_id: str) -> Optional[Dict[str, Any]]:
        object_id = to_object_id(story_id)
        if object_id is None:
            return None
        story = await self.collection.find_one({"_id": object_id})
        return serialize_document(story)

    async def create_story(self, story_data: Dict[str, Any]) -> Dict[str, Any]:
        story_doc = strip_ids(story_data)
        result = await self.collection.insert_one(story_doc)
        logger.info(f"Created story {result.inserted_id}")
        story_doc["_id"] = result.inserted_id
        return serialize_document(story_doc)

    async def update_story(self, story_id: str, story_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        object_id = to_object_id(story_id)
        if object_id is None:
            return None
        result = await self.collection.update_one({"_id": object_id}, {"$set": strip_ids(story_data)})
        if result.matched_count == 0:
            return None
        return await self.get_story(story_id)

    async def delete_story(self, story_id: str) -> bool:
        object_id = to_object_id(story_id)
        if object_id is None:
            return False
        result = await self.collection.delete_one({"_id": object_id})
        return result.deleted_count == 1

    async def increment(self, story_id: str, field: str, amount: int = 1) -> Optional[Dict[str, Any]]:
        """Bump a counter field and return the updated story"""
        object_id = to_object_id(story_id)
        if object_id is None:
            return None
        result = await self.collection.update_one(
            {"_id": object_id},
            {"$inc": {field: amount}, "$set": {"updated_at": datetime.utcnow()}}
        )
        if result.matched_count == 0:
            return None
        return await self.get_story(story_id)

    async def delete_by_titles(self, titles: List[str]) -> int:
        result = await self.collection.delete_many({"title": {"$in": titles}})
        return result.deleted_count

    async def count_stories(self) -> int:
        return await self.collection.count_documents({})

    async def total_views(self) -> int:
        total = 0
        async for story in self.collection.find({}, {"views": 1}):
            views = story.get("views") or 0
            if isinstance(views, (int, float)):
                total += int(views)
        return total
