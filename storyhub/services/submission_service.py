"""
Visitor story submissions and their moderation.

A submission is stored as ``pending``; the admin decision marks it
``approved`` or ``rejected``. Approval copies the submission's content into
a new published story that points back at the submission through
``source_submitted_id``.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from storyhub.database.models.story import StoryDatabase
from storyhub.database.models.submissions import SubmissionDatabase
from storyhub.errors import NotFoundError, ValidationError
from storyhub.services.realtime import EventBuffer

logger = logging.getLogger(__name__)

STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"
SUBMISSION_STATUSES = (STATUS_PENDING, STATUS_APPROVED, STATUS_REJECTED)

# Older submissions stored their body under different names. Order matters:
# records written before a rename only populate the earlier fields.
CONTENT_FIELDS = ("content", "story", "text", "body", "content_html")


def resolve_content(record: Dict[str, Any]) -> str:
    """Return the first non-blank content field, or "" when there is none"""
    for field in CONTENT_FIELDS:
        value = record.get(field)
        if isinstance(value, str) and value.strip():
            return value
    return ""


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


class SubmissionService:
    def __init__(self, submissions: SubmissionDatabase, stories: StoryDatabase, events: EventBuffer):
        self.submissions = submissions
        self.stories = stories
        self.events = events

    async def submit(
        self,
        title: Optional[str],
        author: Optional[str],
        content: Optional[str],
        email: Optional[str] = None,
        dedication: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Dict[str, Any]:
        if _is_blank(title) or _is_blank(author) or _is_blank(content):
            raise ValidationError("Title, author, and content are required")

        submission = await self.submissions.create_submission({
            "title": title,
            "author": author,
            "email": email or "",
            "dedication": dedication or "",
            "content": content,
            "category": category or "",
            "submitted_at": datetime.utcnow(),
            "status": STATUS_PENDING,
        })

        self.events.add(
            "story_submission",
            f'New story submission: "{title}" by {author}',
            {"submissionId": submission["id"]},
        )
        return submission

    async def list_submissions(self) -> List[Dict[str, Any]]:
        return await self.submissions.list_submissions()

    async def decide(self, submission_id: str, update: Dict[str, Any]) -> Dict[str, Any]:
        """Apply the admin's update to a submission and act on its status"""
        status = update.get("status")
        if status is not None and status not in SUBMISSION_STATUSES:
            raise ValidationError(f"Invalid status: {status}")

        existing = await self.submissions.get_submission(submission_id)
        if existing is None:
            raise NotFoundError("Submitted story not found")

        # Check the content before anything is written so a failed approval
        # leaves the submission untouched
        if status == STATUS_APPROVED and not resolve_content({**existing, **update}):
            raise ValidationError("Cannot approve story with empty content")

        updated = await self.submissions.update_submission(submission_id, update)
        if updated is None:
            raise NotFoundError("Submitted story not found")

        title = updated.get("title") or "Untitled"
        if status == STATUS_APPROVED:
            story = await self.publish(updated)
            logger.info(f"Submission {submission_id} approved as story {story['id']}")
        elif status == STATUS_REJECTED:
            self.events.add(
                "story_rejected",
                f'Story "{title}" was rejected',
                {"submissionId": submission_id},
            )
            logger.info(f"Submission {submission_id} rejected")

        return updated

    async def publish(self, submission: Dict[str, Any]) -> Dict[str, Any]:
        """Create the published story for an approved submission"""
        content = resolve_content(submission)
        if not content:
            raise ValidationError("Cannot approve story with empty content")

        now = datetime.utcnow()
        story = await self.stories.create_story({
            "title": submission.get("title") or "Untitled Story",
            "content": content,
            "category": submission.get("category") or "",
            "tags": "",
            "publish_date": now,
            "views": 0,
            "likes": 0,
            "comments_count": 0,
            "created_at": now,
            "updated_at": now,
            "source_submitted_id": submission["id"],
        })

        self.events.add(
            "story_approved",
            f'Story "{submission.get("title") or "Untitled"}" was approved and published',
            {"storyId": story["id"], "submissionId": submission["id"]},
        )
        return story

    async def delete_submission(self, submission_id: str) -> bool:
        deleted = await self.submissions.delete_submission(submission_id)
        if deleted:
            logger.info(f"Deleted submission {submission_id}")
        return deleted
