from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, Optional
from datetime import datetime
from storyhub.errors import NotFoundError, ValidationError
from storyhub.routers.auth import require_admin
from storyhub.state import AppState, get_state
import logging
import re

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/stories", tags=["stories"])

EMOJI_KEY = re.compile(r"^[A-Za-z0-9_-]{1,32}$")

# Models
class StoryCreate(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = ""
    tags: Optional[str] = ""

class ReactionRequest(BaseModel):
    emoji: Optional[str] = None

@router.get("")
async def get_stories(state: AppState = Depends(get_state)):
    """Get published stories, newest first"""
    try:
        return await state.stories.list_stories()
    except Exception as e:
        # Keep the visitor UI working while the store is down
        logger.error(f"Stories fetch error: {e}")
        return []

@router.get("/{story_id}")
async def get_story(story_id: str, state: AppState = Depends(get_state)):
    """Get specific story by ID"""
    story = await state.stories.get_story(story_id)
    if not story:
        raise NotFoundError("Story not found")
    return story

@router.post("")
async def create_story(
    story_request: StoryCreate,
    token: str = Depends(require_admin),
    state: AppState = Depends(get_state)
):
    """Publish a story written by the admin"""
    if not (story_request.title or "").strip() or not (story_request.content or "").strip():
        raise ValidationError("Title and content are required")

    now = datetime.utcnow()
    story = await state.stories.create_story({
        **story_request.model_dump(),
        "category": story_request.category or "",
        "tags": story_request.tags or "",
        "publish_date": now,
        "views": 0,
        "likes": 0,
        "comments_count": 0,
        "created_at": now,
        "updated_at": now,
    })

    state.events.add(
        "new_story",
        f'New story published: "{story["title"]}"',
        {"storyId": story["id"]}
    )
    return story

@router.put("/{story_id}")
async def update_story(
    story_id: str,
    story_data: Dict[str, Any] = Body(...),
    token: str = Depends(require_admin),
    state: AppState = Depends(get_state)
):
    """Update a published story"""
    if "content" in story_data:
        content = story_data["content"]
        if not isinstance(content, str) or not content.strip():
            raise ValidationError("Story content cannot be empty")

    story = await state.stories.update_story(story_id, {**story_data, "updated_at": datetime.utcnow()})
    if not story:
        raise NotFoundError("Story not found")

    state.events.add(
        "story_update",
        f'Story "{story.get("title") or "Untitled"}" was updated',
        {"storyId": story_id}
    )
    return story

@router.delete("/{story_id}")
async def delete_story(
    story_id: str,
    token: str = Depends(require_admin),
    state: AppState = Depends(get_state)
):
    """Delete a published story"""
    if not await state.stories.delete_story(story_id):
        raise NotFoundError("Story not found")

    state.events.add("story_deleted", "Story was deleted", {"storyId": story_id})
    return {"message": "Story deleted successfully"}

@router.post("/{story_id}/like")
async def like_story(story_id: str, state: AppState = Depends(get_state)):
    """Add a like; the browser remembers who liked what"""
    story = await state.stories.increment(story_id, "likes")
    if not story:
        raise NotFoundError("Story not found")

    state.events.add(
        "story_like",
        f'Story "{story.get("title") or "Untitled"}" received a like',
        {"storyId": story_id}
    )
    return {"likes": story.get("likes", 0)}

@router.post("/{story_id}/view")
async def view_story(story_id: str, state: AppState = Depends(get_state)):
    story = await state.stories.increment(story_id, "views")
    if not story:
        raise NotFoundError("Story not found")
    return {"views": story.get("views", 0)}

@router.post("/{story_id}/reaction")
async def react_to_story(
    story_id: str,
    reaction: ReactionRequest,
    state: AppState = Depends(get_state)
):
    """Count an emoji reaction on a story"""
    emoji = (reaction.emoji or "").strip()
    if not EMOJI_KEY.match(emoji):
        raise ValidationError("Invalid reaction")

    story = await state.stories.increment(story_id, f"reactions.{emoji}")
    if not story:
        raise NotFoundError("Story not found")

    state.events.add(
        "story_reaction",
        f'Story "{story.get("title") or "Untitled"}" received a {emoji} reaction',
        {"storyId": story_id, "emoji": emoji}
    )
    return {"reactions": story.get("reactions", {})}
