"""
utils/time_utils.py

Purpose: Time and expiry helpers

- OTP expiry calculation
- Millisecond timestamps for upload filenames
"""

from datetime import datetime, timedelta, timezone
from typing import Optional


def utc_now() -> datetime:
    """
    Current time as a timezone-aware UTC datetime.
    """
    return datetime.now(timezone.utc)


def calculate_otp_expiry(otp_time: datetime, validity_minutes: int = 5) -> datetime:
    """
    Calculates OTP expiry timestamp.
    """
    return otp_time + timedelta(minutes=validity_minutes)


def is_otp_expired(expiry: Optional[datetime], now: Optional[datetime] = None) -> bool:
    """
    Checks if an OTP expiry timestamp has been reached.
    """
    if not expiry:
        return True
    return (now or utc_now()) >= expiry


def timestamp_ms(now: Optional[datetime] = None) -> int:
    """
    Milliseconds since the epoch, used as an upload filename prefix.
    """
    return int((now or utc_now()).timestamp() * 1000)
