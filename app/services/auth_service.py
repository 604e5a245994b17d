"""
app/services/auth_service.py

Purpose: Mobile OTP authentication

- Issues one-time codes (upsert keyed by mobile)
- Verifies codes against the stored code and expiry
- Callers only ever see "Invalid or expired OTP"; the reason is logged
"""

from typing import Any, Dict, Optional, Union

from pymongo import ReturnDocument

from app.core.config import Settings
from app.core.exceptions import AuthenticationError, ValidationError
from app.core.logging import get_logger, LogContext
from app.models.user import OtpCheck, check_otp
from app.services.sms_service import SmsService
from utils.otp_utils import generate_otp
from utils.time_utils import calculate_otp_expiry, utc_now
from utils.validation_utils import normalize_code, normalize_mobile

logger = get_logger(__name__)


async def send_code(
    users,
    mobile: Optional[Union[str, int]],
    settings: Settings,
    sms: Optional[SmsService] = None,
) -> Dict[str, Any]:
    """
    Generates a code for a mobile number and stores it with its expiry.

    Args:
        users: users collection
        mobile: Mobile number the code is issued for
        settings: OTP length and validity window
        sms: Optional SMS sender; used only when configured

    Returns:
        {"user": <upserted user document>, "otp": <generated code>}

    Raises:
        ValidationError: If no mobile number was supplied
    """
    mobile = normalize_mobile(mobile)
    if not mobile:
        raise ValidationError("Mobile number is required")

    with LogContext(mobile=mobile):
        otp = generate_otp(settings.OTP_LENGTH)
        expiry = calculate_otp_expiry(utc_now(), settings.OTP_EXPIRY_MINUTES)

        user = await users.find_one_and_update(
            {"mobile": mobile},
            {"$set": {"otp": otp, "otpExpiry": expiry}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        logger.info("OTP issued")

        if sms is not None and sms.is_configured():
            result = await sms.send_otp(mobile, otp)
            if not result.get("success"):
                logger.warning(f"OTP SMS not delivered: {result.get('error')}")

        return {"user": user, "otp": otp}


async def verify_code(users, mobile: Optional[Union[str, int]], otp: Optional[Union[str, int]]) -> str:
    """
    Checks a code for a mobile number.

    Codes are not consumed; the same code keeps working until it expires
    or a new one is issued.

    Returns:
        The user's id as a hex string

    Raises:
        AuthenticationError: For a missing user, a wrong code or an expired code
    """
    mobile = normalize_mobile(mobile)
    otp = normalize_code(otp)
    if not mobile or not otp:
        logger.info("OTP verification rejected: missing mobile or code")
        raise AuthenticationError()

    with LogContext(mobile=mobile):
        user = await users.find_one({"mobile": mobile})
        outcome = check_otp(user, otp, utc_now())

        if outcome is not OtpCheck.OK:
            logger.info(f"OTP verification failed: {outcome.value}")
            raise AuthenticationError()

        user_id = str(user["_id"])
        logger.info("OTP verified", extra={"user_id": user_id})
        return user_id
