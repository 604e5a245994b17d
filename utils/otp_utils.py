"""
utils/otp_utils.py

Purpose: One-time code generation
"""

import secrets
import string


def generate_otp(length: int = 4) -> str:
    """
    Generates a numeric one-time code.

    Args:
        length: Number of digits

    Returns:
        Code string of exactly `length` digits (leading zeros allowed)
    """
    return "".join(secrets.choice(string.digits) for _ in range(length))
