"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures routers and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.memory import InMemoryUserRepository
from src.adapters.repository.postgres import PostgresUserRepository, run_migrations
from src.api.v1 import router as v1_router
from src.config.settings import get_settings
from src.domain.patterns import PatternValidator
from src.domain.tokens import TokenService

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "users",
        "description": "User registration API v1 - Register users and list registered users",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Builds the pattern validator and token service from settings
      (configuration errors abort startup)
    - Creates the repository (database pool and migrations for postgres)
    - Closes connection pool on shutdown
    """
    settings = get_settings()

    logger.info("Starting application...")

    validator = PatternValidator(
        email_pattern=settings.email_pattern,
        password_pattern=settings.password_pattern,
        password_message=settings.password_message,
    )
    token_service = TokenService(
        secret=settings.jwt_secret,
        expiration_ms=settings.jwt_expiration_ms,
    )

    pool = None
    if settings.repository_backend == "postgres":
        logger.info("Connecting to database...")

        # Create connection pool with explicit sizing
        pool = ConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
        )

        logger.info("Running database migrations...")
        run_migrations(pool)
        repository = PostgresUserRepository(pool)
    else:
        logger.info("Using in-memory repository")
        repository = InMemoryUserRepository()

    # Store components in app state for dependency injection
    app.state.pool = pool
    app.state.repository = repository
    app.state.validator = validator
    app.state.token_service = token_service

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if pool is not None:
        pool.close()
        logger.info("Database connection pool closed")


app = FastAPI(
    title="user-registration",
    description="User Registration API - Registers users and issues signed bearer tokens",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")


@app.get("/health")
async def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with database validation.

    Returns 200 OK if application and database are healthy.
    Raises exception if database connection fails.
    """
    pool = getattr(request.app.state, "pool", None)
    if pool is not None:
        with pool.connection() as conn:
            conn.execute("SELECT 1")

    return {"status": "healthy"}
