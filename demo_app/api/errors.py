"""Exception handlers mapping domain errors to HTTP responses.

Not-found and server errors produce an empty body; validation errors
produce a JSON ``detail`` body with status 400.
"""

import logging

from fastapi import FastAPI, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from demo_app.errors import CommandValidationError, ResourceNotFoundError, StorageError
from demo_app.services.fakestore import FakeStoreAPIError

logger = logging.getLogger(__name__)


async def resource_not_found_handler(
    request: Request, exc: ResourceNotFoundError
) -> Response:
    """Return an empty 404."""
    logger.info("Not found: %s %s - %s", request.method, request.url.path, exc)
    return Response(status_code=status.HTTP_404_NOT_FOUND)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 for body, path and query binding failures.

    The rejected input is left out of each error; it can hold values such
    as a non-finite float that cannot be rendered as JSON.
    """
    logger.warning("Validation error: %s %s", request.method, request.url.path)
    errors = [
        {key: value for key, value in error.items() if key != "input"}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(errors)},
    )


async def command_validation_handler(
    request: Request, exc: CommandValidationError
) -> JSONResponse:
    """Return 400 for field invariants rejected by a command."""
    logger.warning(
        "Command rejected: %s %s - %s", request.method, request.url.path, exc
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc)},
    )


async def server_error_handler(request: Request, exc: Exception) -> Response:
    """Log the failure and return an empty 500."""
    logger.error(
        "Request failed: %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def setup_error_handlers(app: FastAPI) -> None:
    """Register the exception handlers on the application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(ResourceNotFoundError, resource_not_found_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(CommandValidationError, command_validation_handler)
    app.add_exception_handler(FakeStoreAPIError, server_error_handler)
    app.add_exception_handler(StorageError, server_error_handler)
    app.add_exception_handler(Exception, server_error_handler)
