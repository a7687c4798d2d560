"""
Recent-activity feed for the admin dashboard and visitor notifications.

Events live only in this process: the buffer keeps the newest entries and
forgets everything on restart. Listeners can poll a snapshot or subscribe
to a queue that receives each event as it is added.
"""

import asyncio
import itertools
import logging
from collections import deque
from datetime import datetime
from typing import Any, Deque, Dict, List, Optional, Set

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 50

# Event types visitors are allowed to see; everything else is moderation-internal
PUBLIC_EVENT_TYPES = frozenset({"story_approved", "story_update"})


class EventBuffer:
    """Fixed-capacity circular buffer of activity events"""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        self._events: Deque[Dict[str, Any]] = deque(maxlen=capacity)
        self._ids = itertools.count(1)
        self._subscribers: Set[asyncio.Queue] = set()

    @property
    def capacity(self) -> int:
        return self._events.maxlen

    def __len__(self) -> int:
        return len(self._events)

    def add(self, event_type: str, message: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        event = {
            "id": next(self._ids),
            "type": event_type,
            "message": message,
            "data": data or {},
            "timestamp": datetime.utcnow(),
        }
        # deque(maxlen) drops the oldest entry once full
        self._events.append(event)
        logger.debug(f"Real-time event {event['id']}: {event_type}")

        for queue in list(self._subscribers):
            queue.put_nowait(dict(event))
        return dict(event)

    def admin_view(self) -> List[Dict[str, Any]]:
        """All buffered events, newest first"""
        return self._newest_first(self._events)

    def visitor_view(self) -> List[Dict[str, Any]]:
        """Public events only, newest first"""
        return self._newest_first(event for event in self._events if is_public_event(event))

    def subscribe(self) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue()
        self._subscribers.add(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue):
        self._subscribers.discard(queue)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @staticmethod
    def _newest_first(events) -> List[Dict[str, Any]]:
        return sorted((dict(event) for event in events), key=lambda e: (e["timestamp"], e["id"]), reverse=True)


def is_public_event(event: Dict[str, Any]) -> bool:
    return event.get("type") in PUBLIC_EVENT_TYPES
