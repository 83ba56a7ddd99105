"""Tests for student field validators."""

import pytest

from rollbook.core.modules.student.models import StudentStatus
from rollbook.core.modules.student.validators import (
    MISSING_FIELDS_MESSAGE,
    PARENT_CONTACT_MESSAGE,
    clean_text,
    is_parent_contact,
    normalize_parent_contact,
    parse_status,
    require_fields,
    validate_parent_contact,
)
from rollbook.errors import ValidationError


class TestNormalizeParentContact:
    """Tests for normalize_parent_contact function."""

    def test_normalized_value_unchanged(self):
        """Test that an already normalized number passes through (idempotent)."""
        assert normalize_parent_contact("9876543210") == "9876543210"
        assert normalize_parent_contact(normalize_parent_contact("98765-43210")) == "9876543210"

    def test_non_digits_stripped(self):
        assert normalize_parent_contact("98765 43210") == "9876543210"
        assert normalize_parent_contact("(987) 654-3210") == "9876543210"

    def test_keeps_last_ten_digits(self):
        """Test that country prefixes are dropped by keeping the last 10 digits."""
        assert normalize_parent_contact("+91 98765 43210") == "9876543210"
        assert normalize_parent_contact("00919876543210") == "9876543210"

    def test_short_numbers_left_short(self):
        assert normalize_parent_contact("12-345") == "12345"

    def test_non_ascii_digits_removed(self):
        """Test that only ASCII digits survive normalization."""
        assert normalize_parent_contact("٩٨٧٦٥٤٣٢١٠") == ""


class TestValidateParentContact:
    """Tests for parent contact format checks."""

    def test_ten_digits_accepted(self):
        validate_parent_contact("9876543210")
        assert is_parent_contact("0000000000")

    @pytest.mark.parametrize("value", ["12345", "98765432101", "98765-43210", "abcdefghij", "", " 9876543210"])
    def test_invalid_values_rejected(self, value):
        assert not is_parent_contact(value)
        with pytest.raises(ValidationError, match=PARENT_CONTACT_MESSAGE):
            validate_parent_contact(value)


class TestRequireFields:
    """Tests for require_fields function."""

    def test_values_returned_in_order(self):
        assert require_fields("101", " Asha ", "10-A") == ("101", " Asha ", "10-A")

    @pytest.mark.parametrize("values", [(None, "Asha"), ("", "Asha"), ("101", "   ")])
    def test_missing_or_blank_rejected(self, values):
        with pytest.raises(ValidationError) as exc_info:
            require_fields(*values)
        assert str(exc_info.value) == MISSING_FIELDS_MESSAGE


class TestCleanText:
    def test_value_trimmed(self):
        assert clean_text("  Asha  ", "Name") == "Asha"

    def test_blank_rejected(self):
        with pytest.raises(ValidationError, match="Name cannot be empty"):
            clean_text("   ", "Name")


class TestParseStatus:
    """Tests for parse_status function."""

    def test_defaults_to_active(self):
        assert parse_status(None) is StudentStatus.ACTIVE
        assert parse_status("") is StudentStatus.ACTIVE

    def test_known_values(self):
        assert parse_status("Active") is StudentStatus.ACTIVE
        assert parse_status("Inactive") is StudentStatus.INACTIVE

    def test_unknown_value_rejected(self):
        """Test that status matching is case-sensitive."""
        with pytest.raises(ValidationError, match="Status must be one of: Active, Inactive"):
            parse_status("inactive")
