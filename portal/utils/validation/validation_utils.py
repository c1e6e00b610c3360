"""Consolidated Validation Utilities - Single Source of Truth"""
import re
from typing import Any, List

from bson import ObjectId
from bson.errors import InvalidId

from portal.config.settings import DEFAULT_ACTIVITY_LIMIT, MAX_ACTIVITY_LIMIT
from portal.exceptions.exceptions import ValidationError

HEX_COLOR_PATTERN = re.compile(r"^#([0-9a-fA-F]{3}){1,2}$")
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
URL_PATTERN = re.compile(r"^https?://[^\s/$.?#][^\s]*$", re.IGNORECASE)


class ValidationUtils:
    """Unified validation utilities"""

    @staticmethod
    def validate_non_empty_string(value: Any, field_name: str, max_length: int = None) -> str:
        """Validate non-empty string"""
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"{field_name} must be a non-empty string")
        value = value.strip()
        if max_length and len(value) > max_length:
            raise ValidationError(f"{field_name} must be at most {max_length} characters")
        return value

    @staticmethod
    def validate_object_id(value: Any, field_name: str = "id") -> ObjectId:
        """Validate and return an ObjectId"""
        if isinstance(value, ObjectId):
            return value
        if not isinstance(value, str):
            raise ValidationError(f"Invalid {field_name}: {value!r}")
        try:
            return ObjectId(value)
        except (InvalidId, TypeError):
            raise ValidationError(f"Invalid {field_name}: {value!r}")

    @staticmethod
    def validate_object_id_list(values: Any, field_name: str = "ids", unique: bool = False) -> List[ObjectId]:
        if not isinstance(values, list):
            raise ValidationError(f"{field_name} must be a list")
        object_ids = [ValidationUtils.validate_object_id(v, field_name) for v in values]
        if unique and len(set(object_ids)) != len(object_ids):
            raise ValidationError(f"{field_name} must not contain duplicates")
        return object_ids

    @staticmethod
    def validate_limit(value: Any) -> int:
        """Activity feed limit: defaults when absent, bounded otherwise"""
        if value is None:
            return DEFAULT_ACTIVITY_LIMIT
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError("limit must be an integer")
        if value < 1 or value > MAX_ACTIVITY_LIMIT:
            raise ValidationError(f"limit must be between 1 and {MAX_ACTIVITY_LIMIT}")
        return value

    @staticmethod
    def is_hex_color(value: str) -> bool:
        return bool(HEX_COLOR_PATTERN.match(value))

    @staticmethod
    def is_email(value: str) -> bool:
        return bool(EMAIL_PATTERN.match(value))

    @staticmethod
    def is_url(value: str) -> bool:
        return bool(URL_PATTERN.match(value))
