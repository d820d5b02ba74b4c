import functools
import inspect
from http import HTTPStatus
from starlette.requests import Request
from backend.common.fast_api_response_wrapper import error_response
from enum import Enum


class ApiParamName(str, Enum):
    REQUEST = "request"
    CURRENT_USER = "current_user"
    USER_SUB = "user_sub"


def authenticate():
    """
    A generic authentication decorator for FastAPI endpoints.

    This decorator works by **rewriting the endpoint function signature**
    to explicitly include a `request: Request` parameter, allowing FastAPI
    to inject the Request object automatically, while keeping business
    parameters clean and explicit.

    This decorator performs the following:
    1. Ensures a user object exists in `request.state.user`.
    2. Injects user-related parameters into the wrapped function if needed.
    3. Filters out framework-only parameters before calling business logic.

    Role checks are not done here. Roles live on the profile row and are
    checked by the services that need them.

    Supported injectable parameters (by name):
    - `request`      → Starlette/FastAPI Request object
    - `current_user` → Full user object from `request.state.user`
    - `user_sub`     → `user.sub` shortcut value

    Returns: The decorated async function.

    Examples:
        Manual binding in a Controller constructor:
           class MyController:
               def __init__(self):
                   self.router = APIRouter()
                   self.router.add_api_route(
                       "/bookings",
                       endpoint=authenticate()(self.create_booking),
                       methods=["POST"]
                   )

               async def create_booking(self, body: BookingCreateDto, current_user: UserContextDto):
                   # current_user is injected, and 'request' is filtered out
                   ...
    """

    def decorator(func):
        """
        The actual decorator that wraps the target function.

        Args: func: The endpoint function to be wrapped.
        Returns: The wrapped async function with authentication logic applied.
        """
        sig = inspect.signature(func)
        original_params = sig.parameters

        api_params = [
            p
            for name, p in original_params.items()
            if name
            not in {
                ApiParamName.USER_SUB.value,
                ApiParamName.CURRENT_USER.value,
                ApiParamName.REQUEST.value,
            }
        ]

        # Ensure the signature includes `request` so that FastAPI can detect it
        # and inject the Starlette/FastAPI Request object automatically.
        api_params.insert(
            0,
            inspect.Parameter(
                "request", inspect.Parameter.POSITIONAL_OR_KEYWORD, annotation=Request
            ),
        )

        @functools.wraps(func)
        async def wrapper(request: Request, *args, **kwargs):
            """
            Wrapper function that enforces authentication before calling the
            original endpoint.

            Execution flow:
            1. Reads `request.state.user` populated by auth middleware.
            2. Validates user existence (401 if missing).
            3. Constructs business-only kwargs by:
                - Removing framework-injected `request`
                - Injecting `request`, `current_user`, `user_sub`
                only if declared in the original function signature.
            4. Invokes the original endpoint with cleaned arguments.

            Returns: API response from either the auth check or the endpoint.
            """
            # Retrieve the user from request state (set by auth middleware)
            user = getattr(request.state, "user", None)
            if not user:
                return error_response(
                    "Unauthorized: User context missing",
                    status_code=HTTPStatus.UNAUTHORIZED,
                )

            # Remove framework-specific arguments and keep only business parameters
            business_kwargs = {
                k: v for k, v in kwargs.items() if k != ApiParamName.REQUEST.value
            }

            if ApiParamName.REQUEST.value in original_params:
                business_kwargs[ApiParamName.REQUEST.value] = request

            if ApiParamName.CURRENT_USER.value in original_params:
                business_kwargs[ApiParamName.CURRENT_USER.value] = user

            if ApiParamName.USER_SUB.value in original_params:
                business_kwargs[ApiParamName.USER_SUB.value] = getattr(
                    user, "sub", None
                )

            return await func(*args, **business_kwargs)

        wrapper.__signature__ = sig.replace(parameters=api_params)
        return wrapper

    return decorator
