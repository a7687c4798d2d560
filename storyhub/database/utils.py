# storyhub/database/utils.py
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
from bson import ObjectId
from bson.errors import InvalidId

logger = logging.getLogger(__name__)

def to_object_id(value: Any) -> Optional[ObjectId]:
    """Parse a document id from the URL; None when it cannot be an ObjectId"""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None

def serialize_document(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Expose Mongo's _id as a string id"""
    if document is None:
        return None
    document = dict(document)
    if "_id" in document:
        document["id"] = str(document.pop("_id"))
    return document

def strip_ids(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if key not in ("id", "_id")}

def parse_timestamp(value: Any) -> Optional[datetime]:
    """Read a stored date that may be a datetime or an ISO string.

    Aware values are converted to naive UTC so that old string records and
    new datetime records sort together.
    """
    parsed = None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    if parsed is None:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed

def sort_newest_first(documents: Iterable[Dict[str, Any]], *fields: str) -> List[Dict[str, Any]]:
    """Sort by the first readable timestamp among fields, newest first"""
    def sort_key(document):
        for field in fields:
            timestamp = parse_timestamp(document.get(field))
            if timestamp is not None:
                return timestamp
        return datetime.min

    return sorted(documents, key=sort_key, reverse=True)
