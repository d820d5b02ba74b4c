import unittest
from unittest.mock import MagicMock
from starlette.applications import Starlette
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient
from http import HTTPStatus
from backend.common.service_errors import UnauthorizedError
from backend.utils.auth_middleware import AuthMiddleware


class TestAuthMiddleware(unittest.TestCase):
    def setUp(self):
        """
        Runs before each test.

        Initializes a Starlette application containing test routes,
        and prepares a mocked AuthenticationService instance.
        """
        self.mock_auth_service = MagicMock()

        # Define test routes simulating downstream handlers
        async def protected_endpoint(request):
            # Return the user injected into request.state.user
            return JSONResponse({"user": request.state.user})

        async def health_check(request):
            return PlainTextResponse("OK")

        routes = [
            Route("/protected", protected_endpoint),
            Route("/preflight", health_check, methods=["OPTIONS"]),
            Route("/health", health_check),
        ]

        self.app = Starlette(routes=routes)
        self.app.add_middleware(AuthMiddleware, auth_service=self.mock_auth_service)
        self.client = TestClient(self.app)

    def test_authentication_success(self):
        """
        Test: When authentication succeeds, the middleware must inject
        the user context into request.state.user and allow the request to continue.
        """
        expected_user_context = {"sub": "user_123", "primary_email": "a@example.com"}
        self.mock_auth_service.authenticate_request.return_value = expected_user_context

        response = self.client.get(
            "/protected", headers={"Authorization": "Bearer valid_token"}
        )

        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.assertEqual(response.json(), {"user": expected_user_context})
        self.mock_auth_service.authenticate_request.assert_called_once()

    def test_authentication_unauthorized(self):
        """
        Test: If AuthenticationService raises an UnauthorizedError,
        the middleware must return 401 with the error message.
        """
        self.mock_auth_service.authenticate_request.side_effect = UnauthorizedError(
            "Invalid token"
        )

        response = self.client.get("/protected")

        self.assertEqual(response.status_code, HTTPStatus.UNAUTHORIZED)
        self.assertEqual(response.json(), {"error": "Invalid token"})

    def test_authentication_unexpected_error(self):
        """
        Test: Unexpected errors during authentication are logged and
        answered with a generic 401.
        """
        self.mock_auth_service.authenticate_request.side_effect = RuntimeError("boom")

        response = self.client.get("/protected")

        self.assertEqual(response.status_code, HTTPStatus.UNAUTHORIZED)
        self.assertEqual(response.json(), {"error": "Authentication failed"})
        self.mock_auth_service.logger.exception.assert_called_once()

    def test_health_check_skips_authentication(self):
        """Test: the health check is reachable without a token."""
        response = self.client.get("/health")

        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.mock_auth_service.authenticate_request.assert_not_called()

    def test_preflight_skips_authentication(self):
        """Test: OPTIONS requests are never authenticated."""
        response = self.client.options("/preflight")

        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.mock_auth_service.authenticate_request.assert_not_called()


if __name__ == "__main__":
    unittest.main()
