"""FastAPI application for Kalistheniks."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .api.deps import get_session_repository, get_user_repository
from .api.exception_handlers import register_exception_handlers
from .api.middleware.security_headers import SecurityHeadersMiddleware
from .api.routes import auth, plans, sessions
from .utils.log_sanitizer import install_log_sanitizer

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    install_log_sanitizer()
    logger.info(f"Starting Kalistheniks API v{VERSION}")
    logger.info(f"Database: {settings.database_path}")
    logger.info("JWT signing secret: configured and validated")

    # Create tables up front so the first request does not pay for it
    get_user_repository()
    get_session_repository()

    yield

    logger.info("Shutting down Kalistheniks API")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application with middleware, handlers and routers."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Kalistheniks API",
        description="Workout tracking with progression suggestions",
        version=VERSION,
        lifespan=lifespan,
        redirect_slashes=False,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Accept", "Authorization", "Content-Type"],
        max_age=300,
    )

    # Added last so it runs first and covers every response
    app.add_middleware(
        SecurityHeadersMiddleware,
        enable_hsts=settings.security_enable_hsts,
    )

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(sessions.router)
    app.include_router(plans.router)

    @app.get("/health")
    def health():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


def run() -> None:
    """Serve the API with uvicorn using configured host and port."""
    import uvicorn

    from .utils.log_sanitizer import configure_logging

    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
