"""Domain errors raised by services and mapped to HTTP responses"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class StoryHubError(Exception):
    """Base class for errors the API reports to clients"""

    status_code = 500

    def __init__(self, message: str = "Server error"):
        super().__init__(message)
        self.message = message


class ValidationError(StoryHubError):
    status_code = 400


class NotFoundError(StoryHubError):
    status_code = 404


class AuthError(StoryHubError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


async def storyhub_error_handler(request: Request, exc: StoryHubError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=headers)


async def unhandled_error_handler(request: Request, exc: Exception):
    # Details stay in the server log
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Server error"})


def register_error_handlers(app: FastAPI):
    app.add_exception_handler(StoryHubError, storyhub_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
