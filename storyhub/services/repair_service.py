"""
Find published stories whose content is unreadable and restore it from the
submission they were approved from.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from storyhub.database.models.story import StoryDatabase
from storyhub.database.models.submissions import SubmissionDatabase
from storyhub.services.submission_service import resolve_content

logger = logging.getLogger(__name__)

# Values known to be left behind by the broken editor; exact matches only
CORRUPTION_SENTINELS = frozenset({"", "A", "A A A"})

STATUS_REPAIRED = "repaired"
STATUS_NEEDS_MANUAL_REVIEW = "needs_manual_review"
OUTCOME_FAILED = "failed"

MANUAL_REVIEW_NOTE = "Content was corrupted and original submission could not be located or had no content"


def is_corrupted(content: Any) -> bool:
    # Non-string bodies (block lists, rich-text objects) are left alone
    return not content or (isinstance(content, str) and content in CORRUPTION_SENTINELS)


@dataclass
class RepairSummary:
    repaired: int = 0
    needs_manual_review: int = 0
    failed: int = 0
    total: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


class StoryRepairService:
    def __init__(self, stories: StoryDatabase, submissions: SubmissionDatabase):
        self.stories = stories
        self.submissions = submissions

    async def scan(self) -> List[Dict[str, Any]]:
        """Stories whose content is missing or a known corruption sentinel"""
        corrupted = [story for story in await self.stories.list_stories() if is_corrupted(story.get("content"))]
        logger.info(f"Found {len(corrupted)} corrupted stories")
        return corrupted

    async def find_source_submission(self, story: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        source_id = story.get("source_submitted_id") or story.get("original_id")
        if not source_id:
            return None
        try:
            return await self.submissions.get_submission(str(source_id))
        except Exception as e:
            logger.error(f"Error fetching submitted story {source_id}: {e}")
            return None

    async def repair(self, story: Dict[str, Any]) -> str:
        """Repair one story; returns the outcome recorded for it"""
        story_id = story["id"]
        submission = await self.find_source_submission(story)

        if submission is not None:
            content = resolve_content(submission)
            if content:
                try:
                    updated = await self.stories.update_story(story_id, {"content": content, "status": STATUS_REPAIRED})
                except Exception as e:
                    logger.error(f"Error updating story {story_id}: {e}")
                    updated = None
                if updated is not None:
                    logger.info(f"Repaired story {story_id} from submission {submission['id']}")
                    return STATUS_REPAIRED
            else:
                logger.info(f"No valid content in original submission for story {story_id}")
        else:
            logger.info(f"Original submission not found for story {story_id}")

        marked = await self.stories.update_story(story_id, {
            "status": STATUS_NEEDS_MANUAL_REVIEW,
            "repair_notes": MANUAL_REVIEW_NOTE,
        })
        if marked is None:
            logger.error(f"Could not mark story {story_id} for manual review")
            return OUTCOME_FAILED

        logger.info(f"Marked story {story_id} for manual review")
        return STATUS_NEEDS_MANUAL_REVIEW

    async def repair_all(self, stories: Optional[List[Dict[str, Any]]] = None) -> RepairSummary:
        """Repair every corrupted story, counting failures instead of stopping"""
        if stories is None:
            stories = await self.scan()

        summary = RepairSummary(total=len(stories))
        for story in stories:
            try:
                outcome = await self.repair(story)
            except Exception as e:
                logger.error(f"Error repairing story {story.get('id')}: {e}")
                outcome = OUTCOME_FAILED

            if outcome == STATUS_REPAIRED:
                summary.repaired += 1
            elif outcome == STATUS_NEEDS_MANUAL_REVIEW:
                summary.needs_manual_review += 1
            else:
                summary.failed += 1

        logger.info(f"Repair finished: {summary.to_dict()}")
        return summary
