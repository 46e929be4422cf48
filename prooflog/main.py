"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from prooflog.api import auth, entries, public, uploads
from prooflog.api.dependencies import build_session_cookie
from prooflog.api.errors import register_exception_handlers
from prooflog.config import Settings, get_settings
from prooflog.database import Database
from prooflog.services.storage import ProofStorage

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application and the resources it owns."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Handle application startup and shutdown events."""
        app.state.database.create_all()
        logger.info(f"prooflog started ({settings.environment})")
        yield
        app.state.database.dispose()

    app = FastAPI(
        title="Prooflog API",
        description="Portfolio log with proof attachments and public profiles",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.session_cookie = build_session_cookie(settings)
    app.state.database = Database(settings.database_url)
    app.state.storage = ProofStorage.from_settings(settings)

    # CORS middleware for development
    if settings.is_development:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["http://localhost:3000"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    # Register routers
    app.include_router(auth.router)
    app.include_router(entries.router)
    app.include_router(uploads.router)
    app.include_router(public.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "environment": settings.environment}

    return app


app = create_app()
