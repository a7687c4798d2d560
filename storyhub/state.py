"""Process-scoped application state, built once per app and injected into handlers"""

from fastapi import Request

from storyhub.config import Settings
from storyhub.database import (
    AdminDatabase,
    CommentDatabase,
    StoryDatabase,
    SubmissionDatabase,
    VisitorDatabase,
)
from storyhub.services.realtime import EventBuffer
from storyhub.services.repair_service import StoryRepairService
from storyhub.services.submission_service import SubmissionService


class AppState:
    def __init__(self, database, settings: Settings):
        self.database = database
        self.settings = settings
        self.events = EventBuffer(capacity=settings.event_buffer_size)

        self.stories = StoryDatabase(database)
        self.comments = CommentDatabase(database)
        self.visitors = VisitorDatabase(database)
        self.submissions = SubmissionDatabase(database)
        self.admins = AdminDatabase(database)

        self.submission_service = SubmissionService(self.submissions, self.stories, self.events)
        self.repair_service = StoryRepairService(self.stories, self.submissions)


def get_state(request: Request) -> AppState:
    return request.app.state.storyhub
