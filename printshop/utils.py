# printshop/utils.py

from flask import request

from printshop.errors import ValidationError


def json_object() -> dict:
    """Request body as a dict; a missing or unparseable body counts as ``{}``."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def parse_price(value) -> float:
    if value is None:
        raise ValidationError('price is required')
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError('price must be a number')
