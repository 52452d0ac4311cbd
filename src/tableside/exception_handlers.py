"""Global exception handlers for standardized error responses.

Every failure leaves the API as ``{statusCode, error: true, errormessage}``,
the body staff clients already parse. Request validation failures add a
``details`` list with the offending fields.
"""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from tableside.core.logging import logger
from tableside.domain.exceptions import TablesideError
from tableside.models.errors import ErrorResult


def _respond(result: ErrorResult) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.to_content())


async def tableside_exception_handler(
    request: Request, exc: TablesideError
) -> JSONResponse:  # noqa: ASYNC100
    """Handle domain errors (not found, invalid state, validation, persistence, auth).

    Note: FastAPI requires exception handlers to be async even if they don't
    perform async operations.

    Args:
        request: The FastAPI request object.
        exc: The domain error that was raised.

    Returns:
        JSONResponse with ErrorResult body.
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"{type(exc).__name__}: {exc.status_code} - {exc.message} "
        f"({request.method} {request.url.path})"
    )

    return _respond(ErrorResult(status_code=exc.status_code, errormessage=exc.message))


async def http_exception_handler(
    request: Request, exc: HTTPException
) -> JSONResponse:  # noqa: ASYNC100
    """Handle HTTPException (including unknown routes) with an ErrorResult body.

    Args:
        request: The FastAPI request object.
        exc: The HTTPException that was raised.

    Returns:
        JSONResponse with ErrorResult body.
    """
    logger.warning(
        f"HTTPException: {exc.status_code} - {exc.detail} "
        f"({request.method} {request.url.path})"
    )

    unknown_route = exc.status_code == 404 and exc.detail == "Not Found"
    message = "Invalid endpoint" if unknown_route else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResult(status_code=exc.status_code, errormessage=message).to_content(),
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:  # noqa: ASYNC100
    """Handle unexpected exceptions with 500 Internal Server Error.

    Args:
        request: The FastAPI request object.
        exc: The exception that was raised.

    Returns:
        JSONResponse with ErrorResult body.
    """
    logger.exception(
        f"Unexpected error: {type(exc).__name__} ({request.method} {request.url.path})"
    )

    return _respond(
        ErrorResult(
            status_code=500,
            errormessage="An unexpected error occurred. Please try again later.",
        )
    )


async def validation_exception_handler(  # noqa: ASYNC100
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle malformed requests with field-level details.

    Args:
        request: The FastAPI request object.
        exc: The RequestValidationError from Pydantic validation.

    Returns:
        JSONResponse with a 400 ErrorResult body including details.
    """
    errors = exc.errors()
    logger.warning(
        f"Validation error: {len(errors)} errors ({request.method} {request.url.path})"
    )

    details = [
        {
            "type": error["type"],
            "loc": [str(loc) for loc in error["loc"]],
            "msg": error["msg"],
        }
        for error in errors
    ]

    return _respond(
        ErrorResult(
            status_code=400,
            errormessage=f"Wrong params: {len(details)} validation errors",
            details=details,
        )
    )
