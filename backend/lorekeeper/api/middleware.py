"""Middleware for the FastAPI application.

This module contains middleware that process requests and responses, and the
exception handlers that turn domain errors into JSON bodies.
"""

import time
import traceback
import uuid

from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from lorekeeper.core.exceptions import (
    ConflictException,
    LorekeeperException,
    NotFoundException,
    PermissionException,
    UnauthorizedException,
    ValidationException,
    unpack_validation_error,
)
from lorekeeper.core.logging import logger


async def add_request_id(request: Request, call_next: callable) -> Response:
    """Middleware to generate and add a request ID to the request for tracing.

    Args:
    ----
        request (Request): The incoming request.
        call_next (callable): The next middleware in the chain.

    Returns:
    -------
        Response: The response to the incoming request.

    """
    request.state.request_id = str(uuid.uuid4())
    response = await call_next(request)
    response.headers["X-Request-ID"] = request.state.request_id
    return response


async def log_requests(request: Request, call_next: callable) -> Response:
    """Middleware to log incoming requests.

    Args:
    ----
        request (Request): The incoming request.
        call_next (callable): The next middleware in the chain.

    Returns:
    -------
        Response: The response to the incoming request.

    """
    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time
    logger.with_context(request_id=getattr(request.state, "request_id", None)).info(
        f"Handled request {request.method} {request.url.path} in {duration:.2f} seconds. "
        f"Response code: {response.status_code}"
    )
    return response


async def exception_logging_middleware(request: Request, call_next: callable) -> Response:
    """Middleware to log unhandled exceptions.

    The full traceback goes to the log; the client only sees a generic body.

    Args:
    ----
        request (Request): The incoming request.
        call_next (callable): The next middleware in the chain.

    Returns:
    -------
        Response: The response to the incoming request.

    """
    try:
        return await call_next(request)
    except Exception as exc:
        logger.error(f"Unhandled exception: {exc}\n{traceback.format_exc()}")
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal Server Error", "code": LorekeeperException.code},
        )


# Exception handlers
async def validation_exception_handler(
    request: Request, exc: RequestValidationError | ValidationError
) -> JSONResponse:
    """Exception handler for request bodies and parameters that fail schema validation.

    Args:
    ----
        request (Request): The incoming request that triggered the exception.
        exc (RequestValidationError | ValidationError): The exception object that was raised.

    Returns:
    -------
        JSONResponse: A 422 response mapping each invalid field to its message.

    Example of JSON output:
        {
            "detail": {
                "body.name": "String should have at least 1 character",
                "body.level": "Input should be greater than or equal to 1"
            },
            "code": "VALIDATION_ERROR"
        }

    """
    error_messages = unpack_validation_error(exc)
    logger.warning(f"Validation error: {error_messages}")

    detail = {}
    for error in error_messages["errors"]:
        detail.update(error)
    return JSONResponse(
        status_code=422, content={"detail": detail, "code": ValidationException.code}
    )


async def lorekeeper_exception_handler(
    request: Request, exc: LorekeeperException
) -> JSONResponse:
    """Generic exception handler for all LorekeeperException types.

    Maps exception types to HTTP status codes. Checks base classes so that
    any domain exception inheriting from NotFoundException, ConflictException,
    etc. is mapped without registering it here. ResourceInUseException is a
    ConflictException and keeps its own code in the body.
    """
    status_map = {
        NotFoundException: 404,
        PermissionException: 403,
        UnauthorizedException: 401,
        ConflictException: 409,
        ValidationException: 400,
    }

    content = {"detail": exc.message, "code": exc.code}
    for exc_type, status_code in status_map.items():
        if isinstance(exc, exc_type):
            headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
            return JSONResponse(status_code=status_code, content=content, headers=headers)

    # Default for unmapped LorekeeperException subclasses
    logger.error(f"Unmapped {exc.__class__.__name__}: {exc.message}")
    return JSONResponse(status_code=500, content=content)
