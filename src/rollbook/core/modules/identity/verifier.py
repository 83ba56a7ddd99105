import secrets

import structlog

from rollbook.config import Config
from rollbook.core.modules.identity.models import Identity
from rollbook.errors import AuthenticationError

logger = structlog.get_logger(__name__)


class DemoIdentityVerifier:
    """Accepts exactly one fixed username/password pair."""

    def __init__(self, username: str, password: str, display_name: str) -> None:
        self._username = username
        self._password = password
        self._display_name = display_name

    @classmethod
    def from_config(cls, config: Config) -> "DemoIdentityVerifier":
        return cls(config.demo_username, config.demo_password, config.demo_display_name)

    def verify_credentials(self, username: str, password: str) -> Identity:
        """Return the demo identity if both fields match exactly (case-sensitive)."""
        username_ok = secrets.compare_digest(username.encode("utf-8"), self._username.encode("utf-8"))
        password_ok = secrets.compare_digest(password.encode("utf-8"), self._password.encode("utf-8"))
        if not (username_ok and password_ok):
            logger.info("login_failed", username=username)
            raise AuthenticationError("Invalid username or password")
        return Identity(subject=self._username, display_name=self._display_name)
