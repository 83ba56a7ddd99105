import re

from rollbook.core.modules.student.models import StudentStatus
from rollbook.errors import ValidationError

PARENT_CONTACT_RE = re.compile(r"^[0-9]{10}$")
NON_DIGIT_RE = re.compile(r"[^0-9]")

MISSING_FIELDS_MESSAGE = "Missing required fields: rollNo, name, class, parentContact"
PARENT_CONTACT_MESSAGE = "Parent contact must be a 10-digit number"


def normalize_parent_contact(value: str) -> str:
    """Strip every non-digit character and keep the last 10 digits.

    Idempotent: a 10-digit string is returned unchanged.
    """
    return NON_DIGIT_RE.sub("", value)[-10:]


def is_parent_contact(value: str) -> bool:
    return bool(PARENT_CONTACT_RE.fullmatch(value))


def validate_parent_contact(value: str) -> None:
    """Raise ValidationError unless value is exactly 10 ASCII digits."""
    if not is_parent_contact(value):
        raise ValidationError(PARENT_CONTACT_MESSAGE)


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def require_fields(*values: str | None) -> tuple[str, ...]:
    """Return the values unchanged, raising ValidationError if any is missing or blank."""
    if any(is_blank(value) for value in values):
        raise ValidationError(MISSING_FIELDS_MESSAGE)
    return tuple(value for value in values if value is not None)


def clean_text(value: str, label: str) -> str:
    """Trim value; blank values are rejected."""
    cleaned = value.strip()
    if not cleaned:
        raise ValidationError(f"{label} cannot be empty")
    return cleaned


def parse_status(value: str | None) -> StudentStatus:
    """Parse a status value, defaulting to Active when omitted or empty."""
    if not value:
        return StudentStatus.ACTIVE
    try:
        return StudentStatus(value)
    except ValueError:
        allowed = ", ".join(status.value for status in StudentStatus)
        raise ValidationError(f"Status must be one of: {allowed}") from None
