from collections.abc import Mapping
from typing import Any
from uuid import UUID

import structlog
from pymongo import ASCENDING, ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError

from rollbook.config import Config
from rollbook.core.core import Service
from rollbook.core.modules.student.models import UPDATABLE_FIELDS, Student, StudentDraft
from rollbook.core.modules.student.validators import (
    clean_text,
    normalize_parent_contact,
    parse_status,
    require_fields,
    validate_parent_contact,
)
from rollbook.errors import DuplicateKeyError, NotFoundError, ValidationError
from rollbook.utils import now

logger = structlog.get_logger(__name__)

STUDENT_NOT_FOUND = "Student not found"

FIELD_LABELS = {
    "name": "Name",
    "class_name": "Class",
    "parent_contact": "Parent contact",
    "status": "Status",
}


class StudentService(Service):
    """Persists student records and enforces their invariants.

    Validation here repeats the request-level checks so that nothing invalid is
    stored even when the service is called directly. Roll number uniqueness is
    enforced by a unique index, never by a read before the write.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]], config: Config) -> None:
        super().__init__(database, config)
        self._collection = database.get_collection("students")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("roll_no", ASCENDING)], unique=True)

    async def list_students(self) -> list[Student]:
        """Get all students ordered by roll number."""
        return await Student.list_cursor(self._collection.find().sort("roll_no", ASCENDING))

    async def get_student(self, student_id: UUID) -> Student:
        student = Student.from_mongo(await self._collection.find_one({"_id": student_id}))
        if student is None:
            raise NotFoundError(STUDENT_NOT_FOUND)
        return student

    async def create_student(self, draft: StudentDraft) -> Student:
        """Validate, normalize and insert a new student.

        Raises:
            ValidationError: If a field is missing or malformed
            DuplicateKeyError: If the roll number is already taken
        """
        require_fields(draft.roll_no, draft.name, draft.class_name, draft.parent_contact)
        parent_contact = normalize_parent_contact(draft.parent_contact)
        validate_parent_contact(parent_contact)

        timestamp = now()
        student = Student(
            roll_no=draft.roll_no.strip(),
            name=draft.name.strip(),
            class_name=draft.class_name.strip(),
            parent_contact=parent_contact,
            status=parse_status(draft.status),
            created_at=timestamp,
            updated_at=timestamp,
        )
        try:
            await self._collection.insert_one(student.to_mongo())
        except MongoDuplicateKeyError as e:
            logger.info("student_roll_no_taken", roll_no=student.roll_no)
            raise DuplicateKeyError from e

        logger.debug("student_created", student_id=str(student.id), roll_no=student.roll_no)
        return student

    async def update_student(self, student_id: UUID, changes: Mapping[str, Any]) -> Student:
        """Apply a partial update. Keys outside UPDATABLE_FIELDS, including roll_no, are ignored."""
        update = self._clean_changes(changes)
        update["updated_at"] = now()

        document = await self._collection.find_one_and_update(
            {"_id": student_id},
            {"$set": update},
            return_document=ReturnDocument.AFTER,
        )
        student = Student.from_mongo(document)
        if student is None:
            raise NotFoundError(STUDENT_NOT_FOUND)

        logger.debug("student_updated", student_id=str(student_id), fields=sorted(update))
        return student

    async def delete_student(self, student_id: UUID) -> None:
        result = await self._collection.delete_one({"_id": student_id})
        if result.deleted_count == 0:
            raise NotFoundError(STUDENT_NOT_FOUND)
        logger.debug("student_deleted", student_id=str(student_id))

    def _clean_changes(self, changes: Mapping[str, Any]) -> dict[str, Any]:
        cleaned: dict[str, Any] = {}
        for key, value in changes.items():
            if key not in UPDATABLE_FIELDS:
                logger.debug("student_field_ignored", field=key)
                continue
            if value is None:
                continue
            if not isinstance(value, str):
                raise ValidationError(f"{FIELD_LABELS[key]} must be a string")

            if key == "parent_contact":
                cleaned[key] = normalize_parent_contact(value)
                validate_parent_contact(cleaned[key])
            elif key == "status":
                cleaned[key] = parse_status(clean_text(value, FIELD_LABELS[key]))
            else:
                cleaned[key] = clean_text(value, FIELD_LABELS[key])
        return cleaned
