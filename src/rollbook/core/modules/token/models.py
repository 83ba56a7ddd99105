"""Session token models."""

from datetime import datetime, timedelta
from typing import NewType

from pydantic import BaseModel, ConfigDict, Field

AuthToken = NewType("AuthToken", str)

TOKEN_TTL = timedelta(hours=1)


class TokenSettings(BaseModel):
    """Signing parameters, fixed for the lifetime of the process."""

    secret_key: str
    algorithm: str = "HS256"
    ttl: timedelta = TOKEN_TTL

    model_config = ConfigDict(frozen=True)


class TokenClaims(BaseModel):
    """Verified contents of a session token."""

    subject: str = Field(..., description="Identity the token was issued to")
    display_name: str = Field(..., description="Name shown to the user")
    issued_at: datetime
    expires_at: datetime  # issued_at + TOKEN_TTL

    model_config = ConfigDict(frozen=True)
