import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from backend.common.api_endpoints import HEALTH_ENDPOINT
from backend.common.environment_constants import CORS_ALLOW_ORIGINS
from backend.common.fast_api_error_handler import register_exception_handlers
from backend.utils.auth_middleware import AuthMiddleware


def _cors_origins() -> list[str]:
    raw = os.getenv(CORS_ALLOW_ORIGINS, "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()] or ["*"]


class FastAppFactory:
    """
    Factory class for creating and configuring a FastAPI application.

    This class encapsulates the setup of the FastAPI app, including
    routing, dependencies, and any middleware or configuration.
    """

    def __init__(
        self,
        authentication_controller,
        authentication_service,
        mentorship_controller,
        community_controller,
        moderation_controller,
    ):
        """
        Initialize the factory.

        Args:
            authentication_controller: Controller instance responsible for identity routes.
            authentication_service: AuthenticationService instance used by middleware to validate requests.
            mentorship_controller: MentorshipController for bookings, session actions and availability.
            community_controller: CommunityController for the feed, engagement and post discovery.
            moderation_controller: ModerationController for post reports and moderation.
        """
        self.authentication_controller = authentication_controller
        self.authentication_service = authentication_service
        self.mentorship_controller = mentorship_controller
        self.community_controller = community_controller
        self.moderation_controller = moderation_controller

    def create_app(self, is_prod: bool = False) -> FastAPI:
        """
        Create and configure a FastAPI application instance.

        This method performs the following setup steps:
            1. Initializes the FastAPI application.
                - In production mode (is_prod=True), disables Swagger UI, ReDoc,
                    and the OpenAPI schema endpoints.
                - In non-production mode, exposes:
                    * Swagger UI at '/docs'
                    * ReDoc at '/redoc'
                    * OpenAPI schema at '/openapi.json'
            2. Registers global exception handlers.
            3. Adds authentication middleware using AuthMiddleware, wrapped by
               CORSMiddleware so preflight requests never reach authentication.
            4. Registers the controller routes under the '/api' prefix.
            5. Adds an unauthenticated health check endpoint at '/health'.

        Args:
            is_prod (bool): Whether the application is running in production mode.
                If True, API documentation and schema endpoints are disabled.
                Defaults to False.

        Returns:
            FastAPI: A fully configured FastAPI application instance.
        """
        # Initialize the FastAPI app
        app = FastAPI(
            title="Deep API",
            docs_url=None if is_prod else "/docs",
            redoc_url=None if is_prod else "/redoc",
            openapi_url=None if is_prod else "/openapi.json",
        )

        # Register global exception handlers
        register_exception_handlers(app)

        # Middleware added last runs first: CORS wraps authentication.
        app.add_middleware(AuthMiddleware, auth_service=self.authentication_service)
        app.add_middleware(
            CORSMiddleware,
            allow_origins=_cors_origins(),
            allow_credentials=False,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        app.include_router(self.authentication_controller.router, prefix="/api")
        app.include_router(self.mentorship_controller.router, prefix="/api")
        app.include_router(self.community_controller.router, prefix="/api")
        app.include_router(self.moderation_controller.router, prefix="/api")

        @app.get(HEALTH_ENDPOINT)
        def health_check():
            """
            Health check endpoint.

            Returns a simple JSON response to verify that the
            application is running.

            Returns:
                dict: JSON containing the health status.
            """
            return {"status": "ok"}

        return app
