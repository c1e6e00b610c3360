"""Unit tests for input validation helpers."""
import pytest
from bson import ObjectId

from portal.exceptions.exceptions import ValidationError
from portal.utils.validation.validation_utils import ValidationUtils


class TestObjectIdValidation:
    """Tests for id parsing."""

    def test_valid_id(self) -> None:
        """Test that a hex string parses to an ObjectId."""
        oid = ObjectId()
        assert ValidationUtils.validate_object_id(str(oid)) == oid

    @pytest.mark.parametrize("value", ["abc", None, 42, {"$ne": None}])
    def test_invalid_id(self, value) -> None:
        """Test that malformed ids raise ValidationError."""
        with pytest.raises(ValidationError):
            ValidationUtils.validate_object_id(value, "userId")

    def test_list_must_be_a_list(self) -> None:
        """Test that a non-list id collection is rejected."""
        with pytest.raises(ValidationError, match="must be a list"):
            ValidationUtils.validate_object_id_list("abc", "ids")

    def test_duplicates_rejected_when_unique(self) -> None:
        """Test that duplicate ids are rejected when uniqueness is required."""
        oid = str(ObjectId())
        with pytest.raises(ValidationError, match="duplicates"):
            ValidationUtils.validate_object_id_list([oid, oid], "orderedIds", unique=True)


class TestLimitValidation:
    """Tests for the activity feed limit."""

    def test_default_limit(self) -> None:
        """Test that a missing limit defaults to 5."""
        assert ValidationUtils.validate_limit(None) == 5

    @pytest.mark.parametrize("value", [0, -1, 51, "5", 2.5, True])
    def test_out_of_range_or_wrong_type(self, value) -> None:
        """Test that limits outside [1, 50] or non-integers are rejected."""
        with pytest.raises(ValidationError):
            ValidationUtils.validate_limit(value)

    def test_bounds_are_inclusive(self) -> None:
        """Test that 1 and 50 are accepted."""
        assert ValidationUtils.validate_limit(1) == 1
        assert ValidationUtils.validate_limit(50) == 50


class TestStringValidation:
    """Tests for string and format checks."""

    def test_strips_and_returns_value(self) -> None:
        """Test that surrounding whitespace is removed."""
        assert ValidationUtils.validate_non_empty_string("  Intro  ", "title") == "Intro"

    def test_blank_string_rejected(self) -> None:
        """Test that whitespace-only strings are rejected."""
        with pytest.raises(ValidationError):
            ValidationUtils.validate_non_empty_string("   ", "title")

    def test_max_length(self) -> None:
        """Test that strings longer than the limit are rejected."""
        with pytest.raises(ValidationError, match="at most 200"):
            ValidationUtils.validate_non_empty_string("x" * 201, "title", 200)

    def test_format_checks(self) -> None:
        """Test hex colour, email and URL recognition."""
        assert ValidationUtils.is_hex_color("#2563eb")
        assert ValidationUtils.is_hex_color("#fff")
        assert not ValidationUtils.is_hex_color("2563eb")
        assert ValidationUtils.is_email("admin@school.edu")
        assert not ValidationUtils.is_email("admin@school")
        assert ValidationUtils.is_url("https://school.edu/about")
        assert not ValidationUtils.is_url("ftp://school.edu")
