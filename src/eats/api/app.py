"""
Main FastAPI application for the Eats backend
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import settings
from ..database import close_database, init_database
from ..database.connection import check_database_connection
from ..email import EmailService
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware

# Configure logging before creating logger
configure_logging(debug=settings.debug, level=settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting Eats API...")
    init_database()
    logger.info("Database initialized")

    if not settings.jwt_secret:
        logger.warning("EATS_JWT_SECRET is not set; login will fail until it is configured")
    if not settings.mailgun_api_key:
        logger.warning("Mailgun is not configured; verification emails will not be sent")

    yield

    # Shutdown
    logger.info("Shutting down Eats API...")
    await close_database()


def create_app(email_service: EmailService | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Eats API",
        description="Food delivery backend: accounts, restaurants and categories",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(LoggingContextMiddleware)

    # CORS configuration
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
        db_ok, db_message = await check_database_connection()
        body = {
            "status": "healthy" if db_ok else "degraded",
            "version": __version__,
            "database": db_message or "ok",
        }
        return JSONResponse(body, status_code=200 if db_ok else 503)

    try:
        from ..graphql.schema import create_graphql_router, validate_schema

        logger.info("Validating GraphQL schema...")
        validate_schema()

        graphql_router = create_graphql_router(
            email_service=email_service, graphiql=settings.debug
        )
        app.include_router(graphql_router, prefix="")
        logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")
    except Exception as e:  # pragma: no cover
        logger.error("Failed to initialize GraphQL endpoint", error=str(e))
        raise

    return app


# Create the main application instance
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "eats.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
