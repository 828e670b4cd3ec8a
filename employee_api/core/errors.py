# employee_api/core/errors.py
"""Error taxonomy and the FastAPI handlers that turn it into envelopes.

ValidationError -> 400, NotFoundError -> 404, DataError -> 500.
The message travels verbatim into the envelope's ``data``.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class EmployeeAPIError(Exception):
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(EmployeeAPIError):
    """Missing or malformed field, bad email, unparsable date or id."""
    http_status = status.HTTP_400_BAD_REQUEST


class NotFoundError(EmployeeAPIError):
    """Zero rows matched."""
    http_status = status.HTTP_404_NOT_FOUND


class DataError(EmployeeAPIError):
    """Any other store failure: connectivity, constraints, timeouts."""
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR


class DeadlineExceededError(DataError):
    pass


NO_ROWS_MESSAGE = "no rows in result set"


def fail_response(status_code: int, message: str) -> JSONResponse:
    from employee_api.schemas import Envelope  # schemas imports this module

    return JSONResponse(
        status_code=status_code,
        content=Envelope.fail(message).render(),
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(EmployeeAPIError)
    async def employee_api_error_handler(request: Request, exc: EmployeeAPIError):
        # data errors are already logged by the repository
        if exc.http_status < 500:
            logger.warning("%s %s -> %s: %s", request.method, request.url.path,
                           exc.http_status, exc.message)
        return fail_response(exc.http_status, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.warning("Validation error on %s: %s", request.url.path, errors)
        message = "; ".join(
            f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}" for e in errors
        )
        return fail_response(status.HTTP_400_BAD_REQUEST, message or "invalid request")

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
        return fail_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
