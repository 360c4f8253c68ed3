"""
Main FastAPI application for postfeed backend
"""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from .. import __version__
from ..config import settings
from ..database import check_database_connection, dispose_database, init_database
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware

configure_logging(debug=settings.debug, level=settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting postfeed API...")
    init_database()

    ok, error = await check_database_connection()
    if not ok:
        # The API still starts; requests will surface store failures as 500 responses
        logger.error("Database check failed at startup", error=error)

    if settings.environment.lower() in ("production", "prod") and (
        settings.session_secret == "change-me-in-production"
    ):
        raise RuntimeError("POSTFEED_SESSION_SECRET must be set in production")

    yield

    logger.info("Shutting down postfeed API...")
    await dispose_database()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="postfeed API",
        description="GraphQL API for a paginated feed of user posts",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    # Innermost: needs scope["session"], so SessionMiddleware is added after it
    app.add_middleware(LoggingContextMiddleware)

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie=settings.session_cookie,
        max_age=settings.session_max_age,
        same_site="lax",
        https_only=settings.session_https_only,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        db_ok, _ = await check_database_connection()
        return {
            "status": "healthy" if db_ok else "degraded",
            "database": "ok" if db_ok else "unavailable",
            "version": __version__,
        }

    # GraphQL endpoint (allow disabling for tests)
    if not os.getenv("POSTFEED_DISABLE_GRAPHQL"):
        try:
            from ..graphql.schema import create_graphql_router, validate_schema

            logger.info("Validating GraphQL schema...")
            validate_schema()

            app.include_router(create_graphql_router(), prefix="")
            logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")
        except Exception as e:  # pragma: no cover
            logger.error("Failed to initialize GraphQL endpoint", error=str(e))
            raise

    return app


app = create_app()
