# Standard library imports
from pathlib import Path
from contextlib import asynccontextmanager
import logging

# External package imports
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Local application imports
from .api.error_handlers import register_error_handlers
from .api.v1 import auth_router
from .application.dto.auth_dto import MessageResponse
from .core.config import get_settings
from .core.logging_config import configure_logging
from .di.container import get_container, reset_container
from .infrastructure.db.mongo_connection import ensure_user_indexes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.

    Builds the DI container (a missing SMTP/FRONTEND_URL setting raises
    ConfigurationError here and aborts startup), ensures the user indexes
    and closes the Mongo client on shutdown.
    """
    container = get_container()
    await ensure_user_indexes(container.get("user_collection"))
    logger.info("Authentication backend started")

    yield

    container.get("mongo_client").close()
    reset_container()
    logger.info("Application shutdown complete")


def create_application() -> FastAPI:
    """
    Create and configure FastAPI application.

    This function sets up the FastAPI application with:
    - Environment variable loading
    - Logging
    - CORS middleware configuration
    - Error translation
    - API route registration

    Returns:
        Configured FastAPI application instance
    """
    # Load environment variables from .env file
    env_path = Path(__file__).resolve().parent.parent / ".env"
    load_dotenv(env_path)

    settings = get_settings()
    configure_logging(settings.log_level)

    application = FastAPI(
        title="Authentication Backend API",
        version="1.0.0",
        description="Registration, login and password reset",
        lifespan=lifespan
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(application)

    application.include_router(auth_router, prefix="/api/auth")

    @application.get("/", response_model=MessageResponse)
    async def root() -> MessageResponse:
        return MessageResponse(message="API is running...")

    return application


# Create application instance
app = create_application()
