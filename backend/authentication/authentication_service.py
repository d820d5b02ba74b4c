import os
import uuid
import jwt
from typing import Any
from starlette.datastructures import Headers
from backend.common.environment_constants import (
    SUPABASE_JWT_AUDIENCE,
    SUPABASE_JWT_SECRET,
)
from backend.common.service_errors import UnauthorizedError
from backend.dto.user_context_dto import UserContextDto

DEFAULT_JWT_AUDIENCE = "authenticated"
JWT_ALGORITHMS = ["HS256"]


class AuthenticationService:
    """
    Service responsible for authenticating HTTP requests.

    Requests carry a Supabase access token as `Authorization: Bearer <jwt>`.
    Tokens are HS256-signed with the project's JWT secret; this service only
    verifies them and never issues tokens.

    Injects user context including the user id (sub) and email.
    """

    def __init__(
        self,
        logger,
        jwt_secret: str | None = None,
        audience: str | None = None,
    ):
        """
        Initialize the AuthenticationService.

        Args:
            logger: A logger instance.
            jwt_secret (str | None): HS256 secret. Falls back to SUPABASE_JWT_SECRET.
            audience (str | None): Expected `aud` claim. Falls back to
                SUPABASE_JWT_AUDIENCE, then "authenticated".
        """
        self.logger = logger
        self.jwt_secret = jwt_secret or os.getenv(SUPABASE_JWT_SECRET)
        self.audience = (
            audience or os.getenv(SUPABASE_JWT_AUDIENCE) or DEFAULT_JWT_AUDIENCE
        )

        if not self.jwt_secret:
            self.logger.error(
                "[AuthenticationService] %s is not set, every request will be rejected",
                SUPABASE_JWT_SECRET,
            )

    def authenticate_request(self, headers: Headers) -> UserContextDto:
        """
        Authenticate an incoming request from its bearer token.

        Args:
            headers (Headers): The request headers containing authentication information.

        Returns:
            UserContextDto: Contains the user's sub and primary_email.

        Raises:
            UnauthorizedError: If the token is missing, malformed, expired or
                signed with another secret.
        """
        auth_header = headers.get("Authorization")
        if not auth_header:
            raise UnauthorizedError("Missing authentication credentials")

        scheme, _, token = auth_header.partition(" ")
        token = token.strip()
        if scheme.lower() != "bearer" or not token:
            raise UnauthorizedError("Invalid authorization header")

        return self._build_context(self._verify_token(token))

    def _verify_token(self, token: str) -> dict[str, Any]:
        """
        Verify the signature, expiry and audience of a Supabase JWT.

        Args:
            token (str): The encoded JWT.

        Returns:
            dict[str, Any]: The decoded claims.
        """
        if not self.jwt_secret:
            raise UnauthorizedError("Authentication is not configured")

        try:
            return jwt.decode(
                token,
                key=self.jwt_secret,
                algorithms=JWT_ALGORITHMS,
                audience=self.audience,
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise UnauthorizedError("Token expired")
        except jwt.InvalidTokenError as e:
            self.logger.info("[AuthenticationService] rejected token: %s", str(e))
            raise UnauthorizedError("Invalid token")

    def _build_context(self, payload: dict[str, Any]) -> UserContextDto:
        """
        Build the UserContextDto from a verified token payload.

        Args:
            payload (dict): Decoded JWT payload.

        Returns:
            UserContextDto: Contains sub and primary_email.
        """
        sub = payload.get("sub")
        try:
            uuid.UUID(str(sub))
        except ValueError:
            raise UnauthorizedError("Invalid token subject")

        return UserContextDto(sub=str(sub), primary_email=payload.get("email"))
