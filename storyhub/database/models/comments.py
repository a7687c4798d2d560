import logging
from collections import Counter
from typing import Dict, Any, List, Optional
from ..utils import serialize_document, sort_newest_first, strip_ids, to_object_id

logger = logging.getLogger(__name__)

class CommentDatabase:
    """Visitor comment database operations"""

    def __init__(self, database):
        self.collection = database.comments

    async def list_comments(self, story_id: Optional[str] = None, include_private: bool = True) -> List[Dict[str, Any]]:
        """Get comments, optionally for one story, newest first"""
        query: Dict[str, Any] = {}
        if story_id:
            # story_id is always stored as a string
            query["story_id"] = str(story_id)

        comments = []
        async for comment in self.collection.find(query):
            if not include_private and comment.get("is_private"):
                continue
            comments.append(serialize_document(comment))
        return sort_newest_first(comments, "created_at")

    async def get_comment(self, comment_id: str) -> Optional[Dict[str, Any]]:
        object_id = to_object_id(comment_id)
        if object_id is None:
            return None
        return serialize_document(await self.collection.find_one({"_id": object_id}))

    async def create_comment(self, comment_data: Dict[str, Any]) -> Dict[str, Any]:
        comment_doc = strip_ids(comment_data)
        result = await self.collection.insert_one(comment_doc)
        comment_doc["_id"] = result.inserted_id
        return serialize_document(comment_doc)

    async def delete_comment(self, comment_id: str) -> Optional[Dict[str, Any]]:
        """Delete a comment and return what was removed"""
        comment = await self.get_comment(comment_id)
        if comment is None:
            return None
        await self.collection.delete_one({"_id": to_object_id(comment_id)})
        return comment

    async def increment(self, comment_id: str, field: str, amount: int = 1) -> Optional[Dict[str, Any]]:
        object_id = to_object_id(comment_id)
        if object_id is None:
            return None
        result = await self.collection.update_one({"_id": object_id}, {"$inc": {field: amount}})
        if result.matched_count == 0:
            return None
        return await self.get_comment(comment_id)

    async def count_comments(self) -> int:
        return await self.collection.count_documents({})

    async def count_by_visitor(self) -> Dict[str, int]:
        counts: Counter = Counter()
        async for comment in self.collection.find({}, {"visitor_name": 1}):
            name = comment.get("visitor_name")
            if name:
                counts[name] += 1
        return dict(counts)
