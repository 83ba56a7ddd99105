"""Identity verification contract used by the login flow."""

from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field


class Identity(BaseModel):
    """A verified user identity."""

    subject: str = Field(..., description="Stable identifier, used as the token subject")
    display_name: str = Field(..., description="Human-readable name")

    model_config = ConfigDict(frozen=True)


class IdentityVerifier(Protocol):
    """Checks submitted credentials and resolves them to an identity.

    Implementations raise AuthenticationError when the credentials do not match.
    """

    def verify_credentials(self, username: str, password: str) -> Identity: ...
