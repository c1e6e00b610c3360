"""Centralized request parsing - DRY Implementation"""
from flask import request

from portal.exceptions.exceptions import ValidationError


def get_json_data() -> dict:
    """Centralized JSON parsing"""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def get_single_query_param(param_name, required=True):
    """Get single query parameter with validation"""
    value = (request.args.get(param_name) or "").strip()

    if required and not value:
        raise ValidationError(f"Missing required parameter: {param_name}")

    return value or None
