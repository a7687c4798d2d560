from datetime import datetime

import pytest

from storyhub.errors import NotFoundError, ValidationError
from storyhub.services.submission_service import CONTENT_FIELDS, STATUS_PENDING, resolve_content


async def insert_raw_submission(app_state, **fields):
    """Store a submission as older clients wrote it, bypassing validation"""
    doc = {"title": "Legacy", "author": "Someone", "status": STATUS_PENDING,
           "submitted_at": datetime(2024, 1, 1), **fields}
    result = await app_state.database.submitted_stories.insert_one(doc)
    return str(result.inserted_id)


def test_resolve_content_prefers_first_non_blank_field():
    assert resolve_content({"content": "   ", "story": "S", "text": "T"}) == "S"
    assert resolve_content({"content": "C", "body": "B"}) == "C"
    assert resolve_content({"content": None, "content_html": "<p>H</p>"}) == "<p>H</p>"
    assert resolve_content({"title": "only a title"}) == ""


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["title", "author", "content"])
async def test_submit_requires_title_author_content(app_state, missing):
    fields = {"title": "A Title", "author": "An Author", "content": "<p>Body</p>"}
    fields[missing] = "   "

    with pytest.raises(ValidationError) as exc_info:
        await app_state.submission_service.submit(**fields)

    assert exc_info.value.message == "Title, author, and content are required"
    assert await app_state.submissions.count_submissions() == 0


@pytest.mark.asyncio
async def test_submit_stores_pending_submission(app_state):
    submission = await app_state.submission_service.submit(
        title="Night Train", author="Ana", content="<p>All aboard</p>", dedication="For Leo"
    )

    assert submission["status"] == "pending"
    assert submission["email"] == ""
    assert submission["dedication"] == "For Leo"
    stored = await app_state.submissions.get_submission(submission["id"])
    assert stored["title"] == "Night Train"

    event = app_state.events.admin_view()[0]
    assert event["type"] == "story_submission"
    assert event["data"] == {"submissionId": submission["id"]}


@pytest.mark.asyncio
async def test_approval_publishes_story(app_state):
    submission = await app_state.submission_service.submit(
        title="Night Train", author="Ana", content="<p>All aboard</p>", category="Travel"
    )

    updated = await app_state.submission_service.decide(submission["id"], {"status": "approved"})

    assert updated["status"] == "approved"
    stories = await app_state.stories.list_stories()
    assert len(stories) == 1
    story = stories[0]
    assert story["title"] == "Night Train"
    assert story["content"] == "<p>All aboard</p>"
    assert story["category"] == "Travel"
    assert story["tags"] == ""
    assert (story["views"], story["likes"], story["comments_count"]) == (0, 0, 0)
    assert story["source_submitted_id"] == submission["id"]

    event = app_state.events.admin_view()[0]
    assert event["type"] == "story_approved"
    assert event["data"]["storyId"] == story["id"]


@pytest.mark.asyncio
@pytest.mark.parametrize("field", CONTENT_FIELDS)
async def test_approval_reads_legacy_content_fields(app_state, field):
    submission_id = await insert_raw_submission(app_state, **{field: f"<p>from {field}</p>"})

    await app_state.submission_service.decide(submission_id, {"status": "approved"})

    stories = await app_state.stories.list_stories()
    assert [story["content"] for story in stories] == [f"<p>from {field}</p>"]


@pytest.mark.asyncio
async def test_approval_skips_whitespace_only_fields(app_state):
    submission_id = await insert_raw_submission(app_state, content="  \n", story="real story", text="later")

    await app_state.submission_service.decide(submission_id, {"status": "approved"})

    stories = await app_state.stories.list_stories()
    assert stories[0]["content"] == "real story"


@pytest.mark.asyncio
async def test_approval_without_content_is_refused(app_state):
    submission_id = await insert_raw_submission(app_state, content="", story="   ")

    with pytest.raises(ValidationError) as exc_info:
        await app_state.submission_service.decide(submission_id, {"status": "approved"})

    assert exc_info.value.message == "Cannot approve story with empty content"
    assert await app_state.stories.count_stories() == 0
    stored = await app_state.submissions.get_submission(submission_id)
    assert stored["status"] == "pending"


@pytest.mark.asyncio
async def test_approval_uses_content_from_the_update(app_state):
    submission_id = await insert_raw_submission(app_state)

    await app_state.submission_service.decide(
        submission_id, {"status": "approved", "content": "<p>edited by admin</p>"}
    )

    stories = await app_state.stories.list_stories()
    assert stories[0]["content"] == "<p>edited by admin</p>"


@pytest.mark.asyncio
async def test_rejection_does_not_publish(app_state):
    submission = await app_state.submission_service.submit(title="T", author="A", content="C")

    updated = await app_state.submission_service.decide(submission["id"], {"status": "rejected"})

    assert updated["status"] == "rejected"
    assert await app_state.stories.count_stories() == 0
    assert app_state.events.admin_view()[0]["type"] == "story_rejected"


@pytest.mark.asyncio
async def test_update_without_status_only_edits(app_state):
    submission = await app_state.submission_service.submit(title="T", author="A", content="C")

    updated = await app_state.submission_service.decide(submission["id"], {"title": "Better Title"})

    assert updated["title"] == "Better Title"
    assert updated["status"] == "pending"
    assert await app_state.stories.count_stories() == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("submission_id", ["64b7f0c2a1b2c3d4e5f60718", "not-an-object-id"])
async def test_unknown_submission_is_not_found(app_state, submission_id):
    with pytest.raises(NotFoundError) as exc_info:
        await app_state.submission_service.decide(submission_id, {"status": "approved"})
    assert exc_info.value.message == "Submitted story not found"


@pytest.mark.asyncio
async def test_invalid_status_is_rejected(app_state):
    submission = await app_state.submission_service.submit(title="T", author="A", content="C")

    with pytest.raises(ValidationError):
        await app_state.submission_service.decide(submission["id"], {"status": "published"})


@pytest.mark.asyncio
async def test_approving_twice_publishes_twice(app_state):
    submission = await app_state.submission_service.submit(title="T", author="A", content="C")

    await app_state.submission_service.decide(submission["id"], {"status": "approved"})
    await app_state.submission_service.decide(submission["id"], {"status": "approved"})

    assert await app_state.stories.count_stories() == 2


@pytest.mark.asyncio
async def test_delete_submission(app_state):
    submission = await app_state.submission_service.submit(title="T", author="A", content="C")

    assert await app_state.submission_service.delete_submission(submission["id"]) is True
    assert await app_state.submission_service.delete_submission(submission["id"]) is False
    assert await app_state.submission_service.list_submissions() == []
