import unittest
from unittest.mock import MagicMock, patch
from http import HTTPStatus
from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.testclient import TestClient
from backend.utils.auth_middleware import AuthMiddleware
from backend.utils.fast_app_factory import FastAppFactory


class TestFastAppFactory(unittest.TestCase):
    def setUp(self):
        self.mock_controller = MagicMock()
        self.mock_controller.router = APIRouter()
        self.mock_service = MagicMock()

        self.factory = FastAppFactory(
            authentication_controller=self.mock_controller,
            authentication_service=self.mock_service,
            mentorship_controller=self.mock_controller,
            community_controller=self.mock_controller,
            moderation_controller=self.mock_controller,
        )

    def test_factory_initialization(self):
        """Test whether the factory class can be instantiated."""
        self.assertIsInstance(self.factory, FastAppFactory)
        self.assertEqual(self.factory.authentication_controller, self.mock_controller)
        self.assertEqual(self.factory.authentication_service, self.mock_service)
        self.assertEqual(self.factory.mentorship_controller, self.mock_controller)
        self.assertEqual(self.factory.community_controller, self.mock_controller)
        self.assertEqual(self.factory.moderation_controller, self.mock_controller)

    def test_create_app_returns_fastapi_instance(self):
        """Test that create_app returns a FastAPI application instance."""
        app = self.factory.create_app()
        self.assertIsInstance(app, FastAPI)
        self.assertEqual(app.docs_url, "/docs")

    def test_create_prod_app_hides_docs(self):
        """Test that production apps expose no documentation endpoints."""
        app = self.factory.create_app(is_prod=True)

        self.assertIsNone(app.docs_url)
        self.assertIsNone(app.redoc_url)
        self.assertIsNone(app.openapi_url)

    @patch("backend.utils.fast_app_factory.register_exception_handlers")
    def test_exception_handler_registration_called(self, mock_register):
        """
        Test that the exception handler registration function is called
        when the application is created.
        """
        self.factory.create_app()

        mock_register.assert_called_once()
        call_args = mock_register.call_args
        self.assertIsInstance(call_args[0][0], FastAPI)

    def test_cors_wraps_auth_middleware(self):
        """Test that CORS is the outermost middleware, then authentication."""
        app = self.factory.create_app()
        middleware_classes = [m.cls for m in app.user_middleware]

        self.assertEqual(middleware_classes, [CORSMiddleware, AuthMiddleware])

    def test_health_check_is_public(self):
        """Test that /health answers without authentication."""
        client = TestClient(self.factory.create_app())

        response = client.get("/health")

        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.assertEqual(response.json(), {"status": "ok"})
        self.mock_service.authenticate_request.assert_not_called()

    def test_preflight_answered_with_cors_headers(self):
        """Test that a browser preflight gets permissive CORS headers."""
        client = TestClient(self.factory.create_app())

        response = client.options(
            "/api/community/feed",
            headers={
                "Origin": "https://app.deep.dev",
                "Access-Control-Request-Method": "GET",
                "Access-Control-Request-Headers": "authorization",
            },
        )

        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.assertEqual(response.headers["access-control-allow-origin"], "*")
        self.mock_service.authenticate_request.assert_not_called()

    @patch.dict(
        "os.environ", {"CORS_ALLOW_ORIGINS": "https://a.dev, https://b.dev"}
    )
    def test_cors_origins_from_environment(self):
        """Test that configured origins replace the wildcard."""
        client = TestClient(self.factory.create_app())

        response = client.options(
            "/api/community/feed",
            headers={
                "Origin": "https://b.dev",
                "Access-Control-Request-Method": "GET",
            },
        )

        self.assertEqual(
            response.headers["access-control-allow-origin"], "https://b.dev"
        )


if __name__ == "__main__":
    unittest.main()
