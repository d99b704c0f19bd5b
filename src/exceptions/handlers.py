import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.settings import get_settings
from exceptions.api import BaseAPIError, UnexpectedError
from pipeline.responses import standard_response
from validation.requests import format_validation_error

logger = logging.getLogger(__name__)


async def api_error_handler(request: Request, exc: BaseAPIError) -> JSONResponse:
    """Render a domain error into the response envelope."""
    logger.warning(
        "%s %s failed with %s: %s",
        request.method,
        request.url.path,
        type(exc).__name__,
        exc.message
    )
    return standard_response(exc.status_code, False, exc.message)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render a request body or query validation failure as a 400."""
    message = format_validation_error(exc)
    logger.warning(
        "%s %s rejected: %s", request.method, request.url.path, message
    )
    return standard_response(status.HTTP_400_BAD_REQUEST, False, message)


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render framework HTTP errors (unknown route, wrong method)."""
    response = standard_response(exc.status_code, False, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render store faults and unknown errors as a generic 500.

    The original error message is exposed only when ``DEBUG`` is enabled.
    """
    logger.exception(
        "Unexpected error on %s %s", request.method, request.url.path
    )
    message = UnexpectedError.default_message
    if get_settings().DEBUG:
        message = f"{message} {exc}"
    return standard_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, False, message
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install every exception handler on the application.

    Args:
        app (FastAPI): The application to configure.
    """
    app.add_exception_handler(BaseAPIError, api_error_handler)
    app.add_exception_handler(
        RequestValidationError, request_validation_error_handler
    )
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(SQLAlchemyError, unexpected_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
