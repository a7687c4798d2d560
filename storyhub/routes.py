from fastapi import FastAPI
import logging

from storyhub.routers import admin, auth, comments, health, realtime, stories, submissions

logger = logging.getLogger(__name__)

def setup_routes(app: FastAPI, settings):
    """Configure all application routes"""

    app.include_router(auth.router)
    app.include_router(stories.router)
    app.include_router(comments.router)
    app.include_router(submissions.router)
    app.include_router(realtime.router)
    app.include_router(admin.router)
    app.include_router(health.router)

    @app.get("/")
    async def root():
        return {
            "message": "StoryHub API",
            "environment": settings.environment,
            "features": [
                "Published stories",
                "Visitor comments and ratings",
                "Story submissions with admin review",
                "Real-time activity feed",
            ],
            "documentation": "/docs" if settings.debug else "Contact admin for API documentation"
        }
