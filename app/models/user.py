"""
app/models/user.py

Purpose: User document model

- One document per mobile number (unique index on "mobile")
- Holds the last issued one-time code and its expiry
- Created by upsert when a code is sent, never deleted

Document shape:
    {
        "_id": ObjectId,
        "mobile": str,
        "otp": str | None,
        "otpExpiry": datetime (UTC)
    }
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from utils.time_utils import is_otp_expired

USERS_COLLECTION = "users"


class OtpCheck(str, Enum):
    """Outcome of checking a code against a stored user record."""

    OK = "ok"
    NO_USER = "no_user"
    MISMATCH = "mismatch"
    EXPIRED = "expired"


def check_otp(user: Optional[Dict[str, Any]], otp: Optional[str], now: datetime) -> OtpCheck:
    """
    Compares a supplied code with the user's stored one.

    The code must match exactly and the stored expiry must be
    strictly later than `now`.
    """
    if not user:
        return OtpCheck.NO_USER

    stored = user.get("otp")
    if not stored or otp != stored:
        return OtpCheck.MISMATCH

    if is_otp_expired(user.get("otpExpiry"), now):
        return OtpCheck.EXPIRED

    return OtpCheck.OK
