"""Student record models."""

from enum import StrEnum

from pydantic import AliasChoices, BaseModel, Field

from rollbook.core.db import TimestampedMongoModel


class StudentStatus(StrEnum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class Student(TimestampedMongoModel):
    """Student record.

    Indexed on roll_no - unique.
    """

    # Natural key, immutable after creation
    roll_no: str = Field(..., validation_alias=AliasChoices("roll_no", "rollNo"), serialization_alias="rollNo")
    name: str
    class_name: str = Field(..., validation_alias=AliasChoices("class_name", "class"), serialization_alias="class")
    parent_contact: str = Field(
        ..., validation_alias=AliasChoices("parent_contact", "parentContact"), serialization_alias="parentContact"
    )  # Exactly 10 digits
    status: StudentStatus = StudentStatus.ACTIVE


class StudentDraft(BaseModel):
    """Unvalidated input for a new student record."""

    roll_no: str
    name: str
    class_name: str
    parent_contact: str
    status: str | None = None


# Fields that may change after creation; roll_no is immutable
UPDATABLE_FIELDS = frozenset({"name", "class_name", "parent_contact", "status"})
