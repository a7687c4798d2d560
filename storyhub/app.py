from fastapi import FastAPI
import logging

from storyhub.config import Settings, get_settings
from storyhub.database.connection import MongoDB, close_mongo_connection, connect_to_mongo
from storyhub.errors import register_error_handlers
from storyhub.logging_config import setup_logging
from storyhub.middleware import setup_middleware
from storyhub.migrations.setup import ensure_admin_account
from storyhub.routes import setup_routes
from storyhub.state import AppState

logger = logging.getLogger(__name__)

def create_app(settings: Settings = None, database=None, configure_logging: bool = False) -> FastAPI:
    """Build the API.

    When ``database`` is given it is used as-is and no connection is opened
    at startup; otherwise MongoDB is connected from the settings.
    """
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(
        title="StoryHub API",
        description="Short stories, visitor comments and moderated story submissions",
        version="1.0.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
    )

    setup_middleware(app, settings)
    register_error_handlers(app)
    setup_routes(app, settings)

    app.state.mongodb = None
    if database is not None:
        app.state.storyhub = AppState(database, settings)

    @app.on_event("startup")
    async def startup_event():
        if database is None:
            mongodb: MongoDB = await connect_to_mongo(settings.mongodb_uri, settings.database_name)
            app.state.mongodb = mongodb
            app.state.storyhub = AppState(mongodb.database, settings)
            logger.info(f"Using database {settings.database_name}")

        if settings.admin_username and settings.admin_password:
            await ensure_admin_account(app.state.storyhub.admins, settings.admin_username, settings.admin_password)

    @app.on_event("shutdown")
    async def shutdown_event():
        try:
            await close_mongo_connection(app.state.mongodb)
        except Exception as e:
            logger.error(f"Error closing database connection: {e}")

    return app
