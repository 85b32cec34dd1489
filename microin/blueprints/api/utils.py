# microin/blueprints/api/utils.py
import math
from numbers import Real

from flask import current_app, request

from ...exceptions import ValidationFailure


def get_store():
    return current_app.extensions["microin.task_store"]


def get_recommender():
    return current_app.extensions["microin.recommender"]


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationFailure("Request body must be a JSON object.")
    return data


def require_str(data: dict, key: str) -> str:
    val = data.get(key)
    if not isinstance(val, str) or not val.strip():
        raise ValidationFailure(f"'{key}' is required.")
    return val.strip()


def require_str_list(data: dict, key: str, *, allow_empty=True) -> list[str]:
    val = data.get(key)
    if not isinstance(val, list) or not all(isinstance(v, str) for v in val):
        raise ValidationFailure(f"'{key}' must be an array of strings.")
    if not val and not allow_empty:
        raise ValidationFailure(f"'{key}' array is required.")
    return val


def require_number(data: dict, key: str) -> float:
    val = data.get(key)
    # bool is an int subclass; "true" is not a reward
    if isinstance(val, bool) or not isinstance(val, Real):
        raise ValidationFailure(f"'{key}' must be a number.")
    if not math.isfinite(val):
        raise ValidationFailure(f"'{key}' must be a finite number.")
    return val
