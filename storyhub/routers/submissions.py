from fastapi import APIRouter, Body, Depends, Request
from pydantic import BaseModel
from typing import Any, Dict, Optional
from storyhub.middleware import limiter
from storyhub.routers.auth import require_admin
from storyhub.state import AppState, get_state
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["submissions"])

# Models
class SubmissionRequest(BaseModel):
    title: Optional[str] = None
    author: Optional[str] = None
    email: Optional[str] = None
    dedication: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None

@router.post("/submit-story")
@limiter.limit("10/minute")
async def submit_story(
    request: Request,
    submission: SubmissionRequest,
    state: AppState = Depends(get_state)
):
    """Visitor story submission, held for admin review"""
    created = await state.submission_service.submit(
        title=submission.title,
        author=submission.author,
        content=submission.content,
        email=submission.email,
        dedication=submission.dedication,
        category=submission.category,
    )
    return {"message": "Story submitted successfully", "id": created["id"]}

@router.get("/submitted-stories")
async def get_submitted_stories(token: str = Depends(require_admin), state: AppState = Depends(get_state)):
    """All submissions, newest first"""
    return await state.submission_service.list_submissions()

@router.put("/submitted-stories/{submission_id}")
async def update_submitted_story(
    submission_id: str,
    update_data: Dict[str, Any] = Body(...),
    token: str = Depends(require_admin),
    state: AppState = Depends(get_state)
):
    """Approve, reject or edit a submission; approval publishes it"""
    return await state.submission_service.decide(submission_id, update_data)

@router.delete("/submitted-stories/{submission_id}")
async def delete_submitted_story(
    submission_id: str,
    token: str = Depends(require_admin),
    state: AppState = Depends(get_state)
):
    await state.submission_service.delete_submission(submission_id)
    return {"message": "Submitted story deleted"}
