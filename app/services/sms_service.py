"""
app/services/sms_service.py

Purpose: OTP delivery over SMS via Twilio

- Sends plain SMS through Twilio's REST API
- Optional: when credentials are missing, sending is skipped
- Never raises; failures are logged and reported in the result dict
"""

import httpx
from typing import Dict, Any, Optional
from app.core.config import Settings
from app.core.logging import get_logger

logger = get_logger(__name__)

TWILIO_API_BASE = "https://api.twilio.com/2010-04-01"


class SmsService:
    """Service for sending SMS messages via Twilio"""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.account_sid = settings.TWILIO_ACCOUNT_SID
        self.auth_token = settings.TWILIO_AUTH_TOKEN
        self.from_number = settings.TWILIO_FROM_NUMBER
        self.country_code = settings.SMS_COUNTRY_CODE
        self.base_url = f"{TWILIO_API_BASE}/Accounts/{self.account_sid}"
        self._transport = transport
        self._enabled = settings.sms_enabled

    def is_configured(self) -> bool:
        """Check if Twilio is properly configured"""
        return self._enabled

    def format_recipient(self, mobile: str) -> str:
        """Prefixes the configured country code unless the number already has one."""
        if mobile.startswith("+"):
            return mobile
        return f"{self.country_code}{mobile}"

    async def send_message(self, to_mobile: str, message: str) -> Dict[str, Any]:
        """
        Sends an SMS via Twilio

        Args:
            to_mobile: Recipient mobile number (country code optional)
            message: Message text

        Returns:
            {
                "success": True/False,
                "message_sid": "SMxxx...",
                "error": "Optional error message"
            }
        """
        if not self.is_configured():
            logger.debug("Twilio not configured, skipping SMS")
            return {"success": False, "error": "SMS not configured"}

        to_number = self.format_recipient(to_mobile)
        data = {
            "From": self.from_number,
            "To": to_number,
            "Body": message
        }

        try:
            logger.info(f"📤 Sending SMS to {to_number}")

            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    f"{self.base_url}/Messages.json",
                    data=data,
                    auth=(self.account_sid, self.auth_token),
                    timeout=10.0
                )

            if response.status_code in [200, 201]:
                result = response.json()
                logger.info(f"✅ SMS sent: SID={result.get('sid')}")
                return {
                    "success": True,
                    "message_sid": result.get("sid"),
                    "status": result.get("status")
                }

            logger.error(f"❌ Twilio API error: {response.status_code} - {response.text}")
            return {
                "success": False,
                "error": f"Twilio API error: {response.status_code}"
            }

        except httpx.TimeoutException:
            logger.error("Twilio API timeout")
            return {"success": False, "error": "Twilio API timeout"}
        except httpx.HTTPError as e:
            logger.error(f"Error sending SMS: {e}", exc_info=True)
            return {"success": False, "error": str(e)}

    async def send_otp(self, mobile: str, otp: str) -> Dict[str, Any]:
        return await self.send_message(mobile, f"Your OTP is {otp}")
