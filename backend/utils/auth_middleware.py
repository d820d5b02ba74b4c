from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from backend.common.api_endpoints import HEALTH_ENDPOINT
from backend.common.fast_api_response_wrapper import error_response
from backend.common.service_errors import UnauthorizedError
from http import HTTPStatus

PUBLIC_PATHS = {HEALTH_ENDPOINT, "/docs", "/redoc", "/openapi.json"}


class AuthMiddleware(BaseHTTPMiddleware):
    """
    Middleware for authenticating incoming HTTP requests.

    This middleware verifies the bearer token of every request and injects the
    authenticated user's context into the request state, allowing downstream
    route handlers to access user information.

    Features:
        1. Delegates token verification to `AuthenticationService`.
        2. Adds `request.state.user` containing:
            - sub: The user's UUID
            - primary_email: User's email, when the token carries one
        3. Lets CORS preflight requests, the health check and the API docs
           through without a token.
        4. Returns a standardized error response on authentication failure.

    Attributes:
        auth_service: An instance of `AuthenticationService` responsible for token validation.

    Usage:
        app.add_middleware(AuthMiddleware, auth_service=auth_service)

    Exception Handling:
        - UnauthorizedError: Returns HTTP 401 UNAUTHORIZED with the error message.
        - Other exceptions: Returns HTTP 401 UNAUTHORIZED with "Authentication failed".
    """

    def __init__(self, app, auth_service):
        super().__init__(app)
        self.auth_service = auth_service

    async def dispatch(self, request: Request, call_next):
        """
        Middleware method to handle authentication for incoming requests.

        Args:
            request (Request): The incoming FastAPI request object.
            call_next (Callable): The next middleware or route handler to call.

        Returns:
            Response: The response returned by the next handler, or an error response
                    if authentication fails.
        """
        if request.method == "OPTIONS" or request.url.path in PUBLIC_PATHS:
            return await call_next(request)

        try:
            # Validate token and get user context
            user_context = self.auth_service.authenticate_request(request.headers)
            request.state.user = user_context

        except UnauthorizedError as e:
            return error_response(e.message, status_code=HTTPStatus.UNAUTHORIZED)
        except Exception:
            self.auth_service.logger.exception(
                "[AuthMiddleware] unexpected authentication failure on %s",
                request.url.path,
            )
            return error_response(
                "Authentication failed", status_code=HTTPStatus.UNAUTHORIZED
            )

        return await call_next(request)
