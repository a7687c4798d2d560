# storyhub/database/models/submissions.py
import logging
from typing import Dict, Any, List, Optional
from ..utils import serialize_document, sort_newest_first, strip_ids, to_object_id

logger = logging.getLogger(__name__)

class SubmissionDatabase:
    """Visitor-submitted story operations"""

    def __init__(self, database):
        self.collection = database.submitted_stories

    async def create_submission(self, submission_data: Dict[str, Any]) -> Dict[str, Any]:
        submission_doc = strip_ids(submission_data)
        result = await self.collection.insert_one(submission_doc)
        logger.info(f"Story submitted for review with ID: {result.inserted_id}")
        submission_doc["_id"] = result.inserted_id
        return serialize_document(submission_doc)

    async def get_submission(self, submission_id: str) -> Optional[Dict[str, Any]]:
        object_id = to_object_id(submission_id)
        if object_id is None:
            return None
        return serialize_document(await self.collection.find_one({"_id": object_id}))

    async def list_submissions(self, status: Optional[str] = None) -> List[Dict[str, Any]]:
        query = {"status": status} if status else {}
        submissions = []
        async for submission in self.collection.find(query):
            submissions.append(serialize_document(submission))
        return sort_newest_first(submissions, "submitted_at")

    async def update_submission(self, submission_id: str, update_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Apply a partial update and read the record back"""
        object_id = to_object_id(submission_id)
        if object_id is None:
            return None
        fields = strip_ids(update_data)
        if fields:
            result = await self.collection.update_one({"_id": object_id}, {"$set": fields})
            if result.matched_count == 0:
                return None
        return await self.get_submission(submission_id)

    async def delete_submission(self, submission_id: str) -> bool:
        object_id = to_object_id(submission_id)
        if object_id is None:
            return False
        result = await self.collection.delete_one({"_id": object_id})
        return result.deleted_count == 1

    async def count_submissions(self, status: Optional[str] = None) -> int:
        query = {"status": status} if status else {}
        return await self.collection.count_documents(query)
