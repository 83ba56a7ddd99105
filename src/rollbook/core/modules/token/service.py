from datetime import UTC, datetime
from typing import Any

import structlog
from jose import JWTError, jwt
from pymongo.asynchronous.database import AsyncDatabase

from rollbook.config import DEFAULT_TOKEN_SECRET_KEY, Config
from rollbook.core.core import Service
from rollbook.core.modules.token.models import AuthToken, TokenClaims, TokenSettings
from rollbook.errors import InvalidTokenError
from rollbook.utils import now

logger = structlog.get_logger(__name__)


class TokenService(Service):
    """Issues and verifies stateless signed session tokens (JWT)."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]], config: Config) -> None:
        super().__init__(database, config)
        self._settings = TokenSettings(secret_key=config.token_secret_key)

    async def on_start(self) -> None:
        if self._settings.secret_key == DEFAULT_TOKEN_SECRET_KEY:
            logger.warning("token_secret_key_is_default", hint="set ROLLBOOK_TOKEN_SECRET_KEY")

    def issue(self, subject: str, display_name: str, issued_at: datetime | None = None) -> AuthToken:
        """Sign a token for the subject, valid for the configured TTL from issued_at."""
        issued_at = issued_at or now()
        expires_at = issued_at + self._settings.ttl
        claims = {
            "sub": subject,
            "name": display_name,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        return AuthToken(jwt.encode(claims, self._settings.secret_key, algorithm=self._settings.algorithm))

    def verify(self, token: str) -> TokenClaims:
        """Check signature, structure and expiry.

        Raises:
            InvalidTokenError: If the token is tampered with, malformed or expired
        """
        try:
            payload = jwt.decode(
                token,
                self._settings.secret_key,
                algorithms=[self._settings.algorithm],
                options={"require_iat": True, "require_exp": True, "require_sub": True},
            )
        except JWTError as e:
            raise InvalidTokenError(str(e)) from e

        name = payload.get("name")
        if not isinstance(name, str):
            raise InvalidTokenError("Token is missing the name claim")

        return TokenClaims(
            subject=payload["sub"],
            display_name=name,
            issued_at=datetime.fromtimestamp(payload["iat"], UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )
