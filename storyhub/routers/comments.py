from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from typing import Any, Dict, List, Optional, Union
from datetime import datetime
from storyhub.errors import NotFoundError, ValidationError
from storyhub.middleware import limiter
from storyhub.routers.auth import require_admin
from storyhub.state import AppState, get_state
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["comments"])

VOTE_FIELDS = {"upvote": "upvotes", "downvote": "downvotes"}

# Models
class CommentCreate(BaseModel):
    storyId: Optional[Union[str, int]] = None
    visitorName: Optional[str] = None
    text: Optional[str] = None
    rating: Optional[int] = None
    isPrivate: bool = False
    replyTo: Optional[str] = None

class VoteRequest(BaseModel):
    voteType: Optional[str] = None

async def attach_story_titles(state: AppState, comments: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    titles = {story["id"]: story.get("title") for story in await state.stories.list_stories()}
    return [
        {**comment, "story_title": titles.get(str(comment.get("story_id"))) or "Unknown Story"}
        for comment in comments
    ]

async def adjust_comment_count(state: AppState, story_id: str, amount: int):
    # Best effort: the comment itself is already stored or removed
    try:
        await state.stories.increment(story_id, "comments_count", amount)
    except Exception as e:
        logger.warning(f"Could not update comments_count for story {story_id}: {e}")

@router.get("/comments")
async def get_comments(storyId: Optional[str] = None, state: AppState = Depends(get_state)):
    """Public comments, optionally for one story; private ones are never listed"""
    try:
        comments = await state.comments.list_comments(storyId, include_private=False)
        return await attach_story_titles(state, comments)
    except Exception as e:
        logger.error(f"Comments fetch error: {e}")
        return []

@router.get("/admin/comments")
async def get_all_comments(token: str = Depends(require_admin), state: AppState = Depends(get_state)):
    """All comments including private ones"""
    comments = await state.comments.list_comments()
    return await attach_story_titles(state, comments)

@router.post("/comments")
@limiter.limit("30/minute")
async def create_comment(
    request: Request,
    comment_request: CommentCreate,
    state: AppState = Depends(get_state)
):
    story_id = str(comment_request.storyId).strip() if comment_request.storyId is not None else ""
    visitor_name = (comment_request.visitorName or "").strip()
    text = (comment_request.text or "").strip()

    if not story_id or not visitor_name or not text:
        raise ValidationError("Story, visitor name, and comment text are required")

    if comment_request.rating is not None and not 1 <= comment_request.rating <= 5:
        raise ValidationError("Rating must be between 1 and 5")

    story = await state.stories.get_story(story_id)
    if not story:
        raise NotFoundError("Story not found")

    reply_to = None
    if comment_request.replyTo:
        parent = await state.comments.get_comment(comment_request.replyTo)
        if not parent:
            raise NotFoundError("Parent comment not found")
        if str(parent.get("story_id")) != story_id:
            raise ValidationError("Reply must belong to the same story")
        # Replies only nest one level deep
        reply_to = parent.get("reply_to") or parent["id"]

    await state.visitors.touch(visitor_name)

    comment_doc = {
        "story_id": story_id,
        "visitor_name": visitor_name,
        "text": text,
        "rating": comment_request.rating,
        "is_private": comment_request.isPrivate,
        "created_at": datetime.utcnow(),
        "likes": 0,
        "upvotes": 0,
        "downvotes": 0,
    }
    if reply_to:
        comment_doc["reply_to"] = reply_to

    comment = await state.comments.create_comment(comment_doc)
    await adjust_comment_count(state, story_id, 1)

    state.events.add(
        "new_comment",
        f'{visitor_name} commented on "{story.get("title") or "a story"}"',
        {"commentId": comment["id"], "storyId": story_id}
    )
    return comment

@router.delete("/comments/{comment_id}")
async def delete_comment(
    comment_id: str,
    token: str = Depends(require_admin),
    state: AppState = Depends(get_state)
):
    comment = await state.comments.delete_comment(comment_id)
    if not comment:
        raise NotFoundError("Comment not found")

    await adjust_comment_count(state, str(comment.get("story_id")), -1)
    state.events.add(
        "comment_deleted",
        "A comment was deleted",
        {"commentId": comment_id, "storyId": comment.get("story_id")}
    )
    return {"message": "Comment deleted"}

@router.post("/comments/{comment_id}/like")
async def like_comment(comment_id: str, state: AppState = Depends(get_state)):
    comment = await state.comments.increment(comment_id, "likes")
    if not comment:
        raise NotFoundError("Comment not found")
    return {"likes": comment.get("likes", 0)}

@router.post("/comments/{comment_id}/vote")
async def vote_comment(comment_id: str, vote: VoteRequest, state: AppState = Depends(get_state)):
    field = VOTE_FIELDS.get(vote.voteType or "")
    if field is None:
        raise ValidationError("voteType must be 'upvote' or 'downvote'")

    comment = await state.comments.increment(comment_id, field)
    if not comment:
        raise NotFoundError("Comment not found")
    return {"upvotes": comment.get("upvotes", 0), "downvotes": comment.get("downvotes", 0)}
