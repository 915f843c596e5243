"""Field schemas and the validator applied to every catalog write."""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional, Union
from urllib.parse import urlparse

from .models import ValidationResult
from ..core.config import Category, ValidationConfig

logger = logging.getLogger(__name__)


class RuleType(Enum):
    """Kinds of per-field validation rules."""

    STRING = "string"
    NUMBER = "number"
    URL = "url"
    DATE = "date"
    ENUM = "enum"


@dataclass(frozen=True)
class FieldRule:
    """Validation rule for one field of a category schema."""

    type: RuleType
    required: bool = False
    min: Optional[float] = None
    max: Optional[float] = None
    values: tuple = ()


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def check_required(value: Any, field_name: str) -> Optional[str]:
    if _is_empty(value):
        return f"{field_name} is required"
    return None


def check_string(value: Any, field_name: str) -> Optional[str]:
    if value is not None and not isinstance(value, str):
        return f"{field_name} must be a string"
    return None


def check_number(
    value: Any,
    field_name: str,
    min_val: Optional[float] = None,
    max_val: Optional[float] = None,
) -> Optional[str]:
    """Coerce the value to a number and check the inclusive bounds."""
    if value is None:
        return None
    if isinstance(value, bool):
        return f"{field_name} must be a number"
    try:
        number = float(value)
    except (TypeError, ValueError):
        return f"{field_name} must be a number"
    if math.isnan(number):
        return f"{field_name} must be a number"
    if min_val is not None and number < min_val:
        return f"{field_name} must be at least {min_val}"
    if max_val is not None and number > max_val:
        return f"{field_name} must be at most {max_val}"
    return None


def check_url(value: Any, field_name: str) -> Optional[str]:
    """Accept local paths starting with '/' and absolute URLs of any scheme."""
    if _is_empty(value):
        return None
    message = f"{field_name} must be a valid URL or path"
    if not isinstance(value, str):
        return message
    if value.startswith("/"):
        return None
    try:
        parsed = urlparse(value)
    except ValueError:
        return message
    if not parsed.scheme or not (parsed.netloc or parsed.path):
        return message
    if parsed.scheme in ("http", "https") and not parsed.netloc:
        return message
    return None


def check_date(value: Any, field_name: str) -> Optional[str]:
    """Accept ISO calendar dates, with or without a time part."""
    if _is_empty(value):
        return None
    message = f"{field_name} must be a valid date (YYYY-MM-DD)"
    if not isinstance(value, str):
        return message
    try:
        date.fromisoformat(value)
        return None
    except ValueError:
        pass
    try:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
        return None
    except ValueError:
        return message


def check_enum(value: Any, field_name: str, allowed: tuple) -> Optional[str]:
    if _is_empty(value):
        return None
    if value not in allowed:
        return f"{field_name} must be one of: {', '.join(allowed)}"
    return None


_TITLE = FieldRule(RuleType.STRING, required=True)
_TEXT = FieldRule(RuleType.STRING)
_YEAR = FieldRule(RuleType.NUMBER, min=ValidationConfig.YEAR_MIN, max=ValidationConfig.YEAR_MAX)
_RATING = FieldRule(
    RuleType.NUMBER, min=ValidationConfig.RATING_MIN, max=ValidationConfig.RATING_MAX
)
_DATE = FieldRule(RuleType.DATE)
_BOOK_STATUS = FieldRule(RuleType.ENUM, values=tuple(ValidationConfig.BOOK_STATUSES))
_WATCH_STATUS = FieldRule(RuleType.ENUM, values=tuple(ValidationConfig.WATCH_STATUSES))

_VIDEO_SCHEMA = {
    "title": _TITLE,
    "director": _TEXT,
    "country": _TEXT,
    "year": _YEAR,
    "status": _WATCH_STATUS,
    "cover": FieldRule(RuleType.URL, required=True),
    "addedDate": _DATE,
    "rating": _RATING,
    "genre": _TEXT,
    "notes": _TEXT,
}

FIELD_SCHEMAS: Dict[Category, Dict[str, FieldRule]] = {
    Category.BOOKS: {
        "title": _TITLE,
        "author": FieldRule(RuleType.STRING, required=True),
        "publisher": _TEXT,
        "country": _TEXT,
        "year": _YEAR,
        "status": _BOOK_STATUS,
        "platform": _TEXT,
        "cover": FieldRule(RuleType.URL),
        "addedDate": _DATE,
        "rating": _RATING,
        "notes": _TEXT,
    },
    Category.MOVIES: dict(_VIDEO_SCHEMA),
    Category.SERIES: dict(_VIDEO_SCHEMA),
    Category.MUSIC: {
        "title": _TITLE,
        "artist": FieldRule(RuleType.STRING, required=True),
        "cover": FieldRule(RuleType.URL, required=True),
        "year": _YEAR,
        "country": _TEXT,
        "addedDate": _DATE,
        "rating": _RATING,
        "genre": _TEXT,
        "notes": _TEXT,
    },
}


def _check_rule(rule: FieldRule, value: Any, field_name: str) -> Optional[str]:
    if rule.type is RuleType.STRING:
        return check_string(value, field_name)
    elif rule.type is RuleType.NUMBER:
        return check_number(value, field_name, rule.min, rule.max)
    elif rule.type is RuleType.URL:
        return check_url(value, field_name)
    elif rule.type is RuleType.DATE:
        return check_date(value, field_name)
    else:
        return check_enum(value, field_name, rule.values)


def validate_item(category: Union[Category, str], data: Dict[str, Any]) -> ValidationResult:
    """Run every rule of the category schema against a record.

    All violations are collected, not just the first one. Fields outside the
    schema are tolerated; they are logged and listed in ``unknown_fields``.
    The record itself is never modified.
    """
    try:
        category = Category(category)
    except ValueError:
        return ValidationResult(errors=[f"Unknown data type: {category}"])

    schema = FIELD_SCHEMAS[category]
    result = ValidationResult()

    result.unknown_fields = [key for key in data if key not in schema and key != "id"]
    if result.unknown_fields:
        logger.warning(
            "Unknown fields in %s: %s", category.value, ", ".join(result.unknown_fields)
        )

    for field_name, rule in schema.items():
        value = data.get(field_name)

        if rule.required:
            error = check_required(value, field_name)
            if error:
                result.errors.append(error)
                continue

        if _is_empty(value):
            continue

        error = _check_rule(rule, value, field_name)
        if error:
            result.errors.append(error)

    return result
