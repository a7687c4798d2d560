from .connection import MongoDB, connect_to_mongo, close_mongo_connection, check_database_health, create_indexes
from .models.admins import AdminDatabase
from .models.comments import CommentDatabase
from .models.story import StoryDatabase
from .models.submissions import SubmissionDatabase
from .models.visitors import VisitorDatabase

__all__ = [
    'MongoDB',
    'connect_to_mongo',
    'close_mongo_connection',
    'check_database_health',
    'create_indexes',
    'AdminDatabase',
    'CommentDatabase',
    'StoryDatabase',
    'SubmissionDatabase',
    'VisitorDatabase',
]
