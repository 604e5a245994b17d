"""
utils/validation_utils.py

Purpose: Input validation

- Mobile number normalization
- Required-field checks for form submissions
- ObjectId parsing
- Upload filename sanitization
"""

import re
from typing import Any, Optional, Union

from bson import ObjectId
from bson.errors import InvalidId


def normalize_mobile(mobile: Optional[Union[str, int]]) -> Optional[str]:
    """
    Turns a mobile number into a trimmed string.

    Args:
        mobile: Raw mobile number from the request (JSON clients may send a number)

    Returns:
        Trimmed mobile number, or None if nothing is left
    """
    if mobile is None:
        return None
    mobile = str(mobile).strip()
    return mobile or None


def normalize_code(code: Optional[Union[str, int]]) -> Optional[str]:
    """
    String form of a submitted one-time code, or None if empty.
    """
    if code is None:
        return None
    return str(code).strip() or None


def is_blank(value: Any) -> bool:
    """
    True for None, empty strings and whitespace-only strings.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def parse_object_id(value: Optional[str]) -> Optional[ObjectId]:
    """
    Parses a 24-character hex string into an ObjectId.

    Returns:
        ObjectId, or None if the value is not a valid identifier
    """
    if not value:
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def parse_weight(value: Optional[str]) -> Optional[float]:
    """
    Parses a weight form field into a float.

    Returns:
        The number, or None if the value is not numeric
    """
    try:
        weight = float(value)
    except (TypeError, ValueError):
        return None
    if weight != weight or weight in (float("inf"), float("-inf")):
        return None
    return weight


def sanitize_filename(filename: Optional[str], max_length: int = 120) -> str:
    """
    Makes a client-supplied filename safe to store on disk.

    Anything outside letters, digits, dots and dashes becomes "_",
    and path components are dropped.
    """
    if not filename:
        return "file"

    name = re.split(r"[\\/]", filename)[-1]
    name = re.sub(r"[^a-zA-Z0-9.\-]", "_", name)
    name = name.lstrip(".")

    return name[-max_length:] or "file"
