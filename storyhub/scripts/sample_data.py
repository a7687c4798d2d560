"""Sample stories and users for a fresh database, and their removal"""

import logging
from datetime import datetime
from typing import Dict

from storyhub.database.models.story import StoryDatabase
from storyhub.database.models.visitors import VisitorDatabase

logger = logging.getLogger(__name__)

SAMPLE_STORIES = [
    {
        "title": "The Journey Begins",
        "content": "<p>Once upon a time, in a land far away, there lived a young adventurer...</p>",
        "category": "Adventure",
        "tags": "adventure,fantasy",
    },
    {
        "title": "A Silent Night",
        "content": "<p>The moon cast its gentle light over the quiet village...</p>",
        "category": "Fiction",
        "tags": "fiction,drama",
    },
]

SAMPLE_USER_EMAIL = "admin@example.com"

SAMPLE_USERS = [
    {"email": SAMPLE_USER_EMAIL, "role": "admin"},
]


async def seed_database(stories: StoryDatabase, visitors: VisitorDatabase) -> Dict[str, int]:
    now = datetime.utcnow()
    added_stories = 0
    for story in SAMPLE_STORIES:
        created = await stories.create_story({
            **story,
            "publish_date": now,
            "views": 0,
            "likes": 0,
            "comments_count": 0,
            "created_at": now,
            "updated_at": now,
        })
        logger.info(f"Added story with ID: {created['id']}")
        added_stories += 1

    added_users = 0
    for user in SAMPLE_USERS:
        user_id = await visitors.create_user({**user, "created_at": now})
        logger.info(f"Added user with ID: {user_id}")
        added_users += 1

    return {"stories": added_stories, "users": added_users}


async def remove_sample_data(stories: StoryDatabase, visitors: VisitorDatabase) -> Dict[str, int]:
    titles = [story["title"] for story in SAMPLE_STORIES]
    removed_stories = await stories.delete_by_titles(titles)
    removed_users = await visitors.delete_by_email(SAMPLE_USER_EMAIL)
    logger.info(f"Removed {removed_stories} sample stories and {removed_users} sample users")
    return {"stories": removed_stories, "users": removed_users}
