"""Token service for JWT creation and validation."""

import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from geocidades.config import JwtConfig
from geocidades.domain.auth.model.value import UserId
from geocidades.domain.shared.service import Service


class TokenService(Service):
    """Service for JWT access tokens (HS256).

    Tokens identify the user only. They deliberately carry no role claim:
    the role is looked up on every request so that a downgrade takes effect
    immediately instead of when the token expires.
    """

    _config: JwtConfig

    def create_access_token(self, user_id: UserId, email: str) -> str:
        """Create a JWT access token.

        Args:
            user_id: The user's internal ID
            email: The user's login email

        Returns:
            Encoded JWT string
        """
        now = datetime.now(UTC)
        expires_at = now + timedelta(minutes=self._config.access_token_expire_minutes)

        payload = {
            "sub": str(user_id),
            "email": email,
            "aud": "authenticated",
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": secrets.token_hex(16),
        }

        return jwt.encode(
            payload,
            self._config.secret,
            algorithm=self._config.algorithm,
        )

    def validate_access_token(self, token: str) -> dict[str, Any]:
        """Validate and decode a JWT access token.

        Raises:
            jwt.InvalidTokenError: If token is invalid or expired
        """
        return jwt.decode(
            token,
            self._config.secret,
            algorithms=[self._config.algorithm],
            audience="authenticated",
        )

    @property
    def access_token_expire_seconds(self) -> int:
        """Get access token expiry in seconds."""
        return self._config.access_token_expire_minutes * 60
