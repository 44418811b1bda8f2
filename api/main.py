"""
FastAPI Main Application
========================

Main FastAPI application instance with middleware, routes, and lifespan management.
"""

import logging
from contextlib import asynccontextmanager
from typing import Dict, Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware.error_handler import setup_error_handling
from api.routes import auth, health, tasks, users
from config import get_settings
from core.storage import connect_storage
from exceptions import ConfigurationError, DatabaseConnectionError


logger = logging.getLogger(__name__)

# Global application state - holds the shared document store client
app_state: Dict[str, Any] = {}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan event handler for startup and shutdown.

    Startup:
    - Validates the signing secret
    - Connects to the document store once; failure aborts startup so the
      server process exits with a nonzero status

    Shutdown:
    - Closes the store connection and clears state
    """
    settings = get_settings()

    logger.info("Starting Task Tracker API...")

    if not settings.jwt_secret_key:
        raise ConfigurationError("jwt_secret_key", "must not be empty")
    if settings.jwt_secret_key == "change-me-in-production":
        logger.warning("Using the default JWT secret; set TASKTRACKER_JWT_SECRET_KEY")

    try:
        app_state["redis"] = await connect_storage(settings)
    except DatabaseConnectionError as e:
        logger.error(f"Document store connection error: {e.message} ({e.details.get('original_error')})")
        raise

    app_state["settings"] = settings
    logger.info(f"Server running on port {settings.api_port}")

    yield  # Application runs here

    logger.info("Shutting down Task Tracker API...")
    client = app_state.pop("redis", None)
    if client is not None:
        await client.aclose()
    app_state.clear()


# Create FastAPI application
app = FastAPI(
    title="Task Tracker API",
    description="""
    Minimal task-tracking backend.

    ## Features
    - Account registration and login (bcrypt-hashed passwords)
    - Bearer token (JWT) session authentication
    - Create, list, check and delete per-user tasks
    """,
    version="1.0.0",
    lifespan=lifespan
)


# =============================================================================
# Middleware Setup
# =============================================================================

settings = get_settings()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_error_handling(app)


# =============================================================================
# Router Registration
# =============================================================================

app.include_router(health.router, tags=["health"])
app.include_router(auth.router, tags=["auth"])
app.include_router(users.router, tags=["users"])
app.include_router(tasks.router, tags=["tasks"])
