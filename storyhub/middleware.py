from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from storyhub.logging_config import add_request_id_middleware
import logging

logger = logging.getLogger(__name__)

# Shared by every router that declares a per-route limit
limiter = Limiter(key_func=get_remote_address)

DEFAULT_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]

def setup_middleware(app: FastAPI, settings):
    """Configure request id, CORS, security headers and rate limiting"""

    # Request ID middleware
    app.middleware("http")(add_request_id_middleware)

    origins = []
    if isinstance(settings.allowed_origins, str):
        origins = [origin.strip() for origin in settings.allowed_origins.split(',') if origin.strip()]
    elif isinstance(settings.allowed_origins, list):
        origins = settings.allowed_origins

    if not origins:
        origins = DEFAULT_ORIGINS

    logger.info(f"CORS allowed origins: {origins}")

    # Wildcard origins cannot be combined with credentials
    allow_credentials = "*" not in origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID", "Accept", "Cache-Control"],
        expose_headers=["X-Request-ID"],
        max_age=600,
    )

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response = await call_next(request)

        if request.method != "OPTIONS":
            response.headers.update({
                "X-Content-Type-Options": "nosniff",
                "X-Frame-Options": "DENY",
                "X-XSS-Protection": "1; mode=block",
            })

        return response

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
