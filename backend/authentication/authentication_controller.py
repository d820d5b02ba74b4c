from fastapi import APIRouter
from backend.dto.user_context_dto import UserContextDto
from backend.common.fast_api_response_wrapper import api_response
from backend.common.api_endpoints import MY_IDENTITY_ENDPOINT
from backend.utils.permission_decorators import authenticate


class AuthenticationController:
    """
    Controller for user authentication-related endpoints.

    This controller exposes the identity and role of the currently authenticated
    user. It relies on `AuthMiddleware` to inject the user context into
    `request.state.user`.

    Endpoints:
        GET /me: Returns the id, email and role of the current user.
    """

    def __init__(self, identity_service, database):
        self.router = APIRouter(tags=["Authentication"])
        self.identity_service = identity_service
        self.database = database

        # Register route
        self.router.add_api_route(
            MY_IDENTITY_ENDPOINT,
            endpoint=authenticate()(self.get_me),
            methods=["GET"],
            response_model=None,
        )

    async def get_me(self, current_user: UserContextDto):
        """
        Get the current authenticated user's identity and role.

        Example:
            {
                "success": True,
                "message": "Successfully",
                "data": {
                    "id": "6a1f...",
                    "email": "ada@example.com",
                    "fullName": "Ada",
                    "role": "moderator"
                }
            }
        """
        async with self.database.session() as session:
            identity = await self.identity_service.get_me(session, current_user)

        return api_response(data=identity, message="Successfully")
