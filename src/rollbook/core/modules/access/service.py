import structlog

from rollbook.core.core import Service
from rollbook.core.modules.token.models import AuthToken, TokenClaims
from rollbook.errors import AuthenticationError, InvalidTokenError

logger = structlog.get_logger(__name__)

BEARER_SCHEME = "Bearer"


class AccessService(Service):
    """Guards protected operations: every caller must present a valid bearer token."""

    def extract_bearer_token(self, authorization: str | None) -> AuthToken:
        """Extract the token from an `Authorization: Bearer <token>` header value.

        The scheme is matched case-sensitively and exactly one non-empty token
        must follow it. Anything else is rejected without touching the token service.
        """
        if not authorization:
            raise AuthenticationError
        scheme, _, token = authorization.partition(" ")
        if scheme != BEARER_SCHEME or not token or token != token.strip() or " " in token:
            raise AuthenticationError
        return AuthToken(token)

    def authenticate(self, auth_token: AuthToken) -> TokenClaims:
        """Verify the token and return its claims."""
        try:
            return self.core.services.token.verify(auth_token)
        except InvalidTokenError as e:
            logger.debug("token_rejected", reason=str(e))
            raise AuthenticationError("Invalid or expired token") from e

    async def ensure_authenticated(self, auth_token: AuthToken) -> TokenClaims:
        """Ensure the caller is authenticated."""
        return self.authenticate(auth_token)
