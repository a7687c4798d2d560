from fastapi import APIRouter, Depends
from storyhub.routers.auth import require_admin
from storyhub.services.submission_service import STATUS_PENDING
from storyhub.state import AppState, get_state
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["admin"])

@router.get("/users")
async def get_users(token: str = Depends(require_admin), state: AppState = Depends(get_state)):
    """Visitor sessions with their comment counts, most recently active first"""
    visitors = await state.visitors.list_visitors()
    comment_counts = await state.comments.count_by_visitor()
    return [
        {**visitor, "comment_count": comment_counts.get(visitor.get("name"), 0)}
        for visitor in visitors
    ]

@router.get("/analytics")
async def get_analytics(token: str = Depends(require_admin), state: AppState = Depends(get_state)):
    """Dashboard totals"""
    return {
        "totalViews": await state.stories.total_views(),
        "totalStories": await state.stories.count_stories(),
        "totalComments": await state.comments.count_comments(),
        "totalVisitors": await state.visitors.count_visitors(),
        "totalSubmittedStories": await state.submissions.count_submissions(),
        "pendingSubmissions": await state.submissions.count_submissions(STATUS_PENDING),
    }
