from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from http import HTTPStatus


def api_response(
    message: str,
    success: bool = True,
    data: dict | None = None,
    status_code: HTTPStatus = HTTPStatus.OK,
) -> JSONResponse:
    """
    Generate a standardized JSON API response.

    This function creates a consistent JSON response format for API endpoints,
    including a success flag, message, optional data payload, and HTTP status code.
    Pydantic DTOs inside `data` are serialized by alias (camelCase).

    Args:
        message (str): A descriptive message explaining the result of the API call.
        success (bool): Whether the API call succeeded (True) or failed (False).
        data (dict | None): Optional payload to include in the response body.
                            Can be None.
        status_code (HTTPStatus): The HTTP status code for the response.
                                  Defaults to HTTPStatus.OK (200).

    Returns:
        JSONResponse: A FastAPI/Starlette JSONResponse object containing the
                      structured response body and HTTP status code.

    Example:
        return api_response(
            message="Booking created successfully",
            data={"booking": booking_dto},
            status_code=HTTPStatus.CREATED,
        )
    """

    response_body = {
        "success": success,
        "message": message,
        "data": data,
    }
    serialized_body = jsonable_encoder(response_body, by_alias=True)

    return JSONResponse(
        status_code=status_code.value,
        content=serialized_body,
    )


def error_response(
    error: str,
    status_code: HTTPStatus,
    details: str | None = None,
) -> JSONResponse:
    """
    Generate the JSON error body returned for every failed request.

    The body is `{"error": <message>}`, with a `details` key only when extra
    caller-safe context is available.

    Args:
        error (str): Short, user-facing error message.
        status_code (HTTPStatus): The HTTP status code for the response.
        details (str | None): Optional additional context.

    Returns:
        JSONResponse: The serialized error response.
    """
    body = {"error": error}
    if details:
        body["details"] = details

    return JSONResponse(status_code=status_code.value, content=body)
