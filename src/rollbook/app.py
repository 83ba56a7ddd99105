from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any
from uuid import UUID

import structlog
from pymongo import AsyncMongoClient

from rollbook.config import Config
from rollbook.core.core import Core
from rollbook.core.modules.identity.models import IdentityVerifier
from rollbook.core.modules.student.models import Student, StudentDraft
from rollbook.core.modules.student.service import STUDENT_NOT_FOUND
from rollbook.core.modules.student.validators import require_fields, validate_parent_contact
from rollbook.core.modules.token.models import AuthToken, TokenClaims
from rollbook.errors import NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class App:
    """Facade for all application operations, authenticates and validates requests before delegating to Core."""

    def __init__(
        self,
        config: Config,
        mongo_client: AsyncMongoClient[dict[str, Any]] | None = None,
        identity_verifier: IdentityVerifier | None = None,
    ) -> None:
        self._core = Core(config, mongo_client=mongo_client, identity_verifier=identity_verifier)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Authentication ===
    def extract_bearer_token(self, authorization: str | None) -> AuthToken:
        """Extract the bearer token from an Authorization header value."""
        return self._core.services.access.extract_bearer_token(authorization)

    def authenticate(self, auth_token: AuthToken) -> TokenClaims:
        """Verify a bearer token and return its claims."""
        return self._core.services.access.authenticate(auth_token)

    async def login(self, username: str | None, password: str | None) -> AuthToken:
        """Check credentials against the identity verifier and issue a session token."""
        if not username or not password:
            raise ValidationError("Missing credentials")
        identity = self._core.identity_verifier.verify_credentials(username, password)
        logger.info("login_succeeded", subject=identity.subject)
        return self._core.services.token.issue(identity.subject, identity.display_name)

    async def get_protected_message(self, auth_token: AuthToken) -> str:
        """Greeting for the authenticated user."""
        claims = await self._core.services.access.ensure_authenticated(auth_token)
        return f"Hello {claims.display_name}, this is a protected message."

    # === Students ===
    async def get_all_students(self, auth_token: AuthToken) -> list[Student]:
        """Get all students ordered by roll number (requires authentication)."""
        await self._core.services.access.ensure_authenticated(auth_token)
        return await self._core.services.student.list_students()

    async def get_student(self, auth_token: AuthToken, student_id: str) -> Student:
        """Get a single student (requires authentication)."""
        await self._core.services.access.ensure_authenticated(auth_token)
        return await self._resolve_student(student_id)

    async def create_student(
        self,
        auth_token: AuthToken,
        roll_no: str | None,
        name: str | None,
        class_name: str | None,
        parent_contact: str | None,
        status: str | None = None,
    ) -> Student:
        """Create a student after checking required fields and the raw contact format."""
        claims = await self._core.services.access.ensure_authenticated(auth_token)
        roll_no, name, class_name, parent_contact = require_fields(roll_no, name, class_name, parent_contact)
        validate_parent_contact(parent_contact)

        draft = StudentDraft(
            roll_no=roll_no,
            name=name,
            class_name=class_name,
            parent_contact=parent_contact,
            status=status,
        )
        student = await self._core.services.student.create_student(draft)
        logger.info("student_created", student_id=str(student.id), by=claims.subject)
        return student

    async def update_student(
        self,
        auth_token: AuthToken,
        student_id: str,
        name: str | None = None,
        class_name: str | None = None,
        parent_contact: str | None = None,
        status: str | None = None,
    ) -> Student:
        """Update the supplied fields of a student; empty values are treated as not supplied."""
        await self._core.services.access.ensure_authenticated(auth_token)
        student = await self._resolve_student(student_id)
        if parent_contact:
            validate_parent_contact(parent_contact)

        changes = {
            "name": name,
            "class_name": class_name,
            "parent_contact": parent_contact,
            "status": status,
        }
        changes = {key: value for key, value in changes.items() if value}

        return await self._core.services.student.update_student(student.id, changes)

    async def delete_student(self, auth_token: AuthToken, student_id: str) -> None:
        """Permanently delete a student (requires authentication)."""
        claims = await self._core.services.access.ensure_authenticated(auth_token)
        await self._core.services.student.delete_student(self._parse_student_id(student_id))
        logger.info("student_deleted", student_id=student_id, by=claims.subject)

    # === Private resolver methods ===
    async def _resolve_student(self, student_id: str) -> Student:
        """Resolve a student id from a URL to a Student. Raises NotFoundError if not found."""
        return await self._core.services.student.get_student(self._parse_student_id(student_id))

    @staticmethod
    def _parse_student_id(student_id: str) -> UUID:
        try:
            return UUID(student_id)
        except ValueError:
            raise NotFoundError(STUDENT_NOT_FOUND) from None
