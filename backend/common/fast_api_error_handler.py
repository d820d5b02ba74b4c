from http import HTTPStatus
from backend.common.fast_api_response_wrapper import error_response
from backend.common.logger import get_logger
from backend.common.service_errors import ServiceError
from fastapi import Request, FastAPI
from fastapi.exceptions import RequestValidationError

logger = get_logger("errors")


async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler used to convert Python exceptions into a unified error response.
    It also performs structured logging while preventing sensitive information from leaking
    to the client.
    """

    # Determine the HTTP status code based on the type of exception.
    match exc:
        case ServiceError():
            status = exc.status_code
        case ValueError() | RequestValidationError():
            status = HTTPStatus.BAD_REQUEST
        case _:
            status = HTTPStatus.INTERNAL_SERVER_ERROR

    # Extract information from the request path.
    parts = request.url.path.strip("/").split("/")
    area = parts[1] if len(parts) > 1 else "unknown"
    is_server_error = status >= 500

    # The log message always contains the full raw error details.
    log_msg = str(exc)

    # The user-facing message hides details for server errors and
    # simplifies validation errors.
    details = None
    if is_server_error:
        user_message = "Internal Server Error. Please contact support."
    elif isinstance(exc, RequestValidationError):
        first_error = exc.errors()[0]
        loc = first_error.get("loc", [])
        user_message = "Validation Error"
        details = f"{loc[-1] if loc else 'request'} - {first_error.get('msg')}"
    elif isinstance(exc, ServiceError):
        user_message = exc.message
        details = exc.details
    else:
        user_message = str(exc)

    # Full stack traces are logged only for server-side errors.
    log_method = logger.error if is_server_error else logger.warning
    log_method(
        "[%s] %s on area [%s]: %s",
        "Server Error" if is_server_error else "Client Error",
        type(exc).__name__,
        area,
        log_msg,
        exc_info=is_server_error,
    )

    return error_response(error=user_message, status_code=status, details=details)


def register_exception_handlers(app: FastAPI):
    """
    Registers the global exception handlers on the provided FastAPI application.

    Client-side error types are registered explicitly so they are converted by
    the exception middleware inside the CORS layer; `Exception` is the
    last-resort handler for everything else.
    """
    for exc_cls in (Exception, RequestValidationError, ServiceError, ValueError):
        app.add_exception_handler(exc_cls, global_exception_handler)
