"""Main module of the FastAPI application.

This module sets up the FastAPI application and the middleware to log incoming requests
and unhandled exceptions.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from lorekeeper.api.middleware import (
    add_request_id,
    exception_logging_middleware,
    log_requests,
    lorekeeper_exception_handler,
    validation_exception_handler,
)
from lorekeeper.api.v1.api import api_router
from lorekeeper.core.config import settings
from lorekeeper.core.exceptions import LorekeeperException
from lorekeeper.core.logging import logger

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events.

    Initializes the DI container; broken wiring fails the startup.
    """
    from lorekeeper.core import container as container_mod
    from lorekeeper.core.container import initialize_container

    if container_mod.container is None:
        logger.info("Initializing dependency injection container...")
        initialize_container(settings)
        logger.info("Container initialized successfully")

    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{API_PREFIX}/openapi.json",
    docs_url=f"{API_PREFIX}/docs",
    lifespan=lifespan,
)

app.include_router(api_router, prefix=API_PREFIX)

# Register middleware directly in the correct order
# Order matters: last registered = outermost middleware (processes request first)
app.middleware("http")(exception_logging_middleware)
app.middleware("http")(log_requests)
app.middleware("http")(add_request_id)

# Register exception handlers
app.exception_handler(RequestValidationError)(validation_exception_handler)
app.exception_handler(LorekeeperException)(lorekeeper_exception_handler)
