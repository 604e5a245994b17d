"""
app/schemas/auth.py

Purpose: OTP request/response schemas

- send-otp and verify-otp bodies
- Fields are optional so that missing values surface as
  the workflow's own 400 errors instead of 422s
- Numbers are accepted for mobile and otp; the workflow compares
  their string form
"""

from pydantic import BaseModel, Field
from typing import Optional, Union


class SendOtpRequest(BaseModel):
    mobile: Optional[Union[str, int]] = Field(None, description="Mobile number to send the code to")

    class Config:
        json_schema_extra = {"example": {"mobile": "9999999999"}}


class SendOtpResponse(BaseModel):
    message: str
    otp: Optional[str] = Field(None, description="Issued code, only when OTP exposure is enabled")


class VerifyOtpRequest(BaseModel):
    mobile: Optional[Union[str, int]] = None
    otp: Optional[Union[str, int]] = None

    class Config:
        json_schema_extra = {"example": {"mobile": "9999999999", "otp": "4821"}}


class VerifyOtpResponse(BaseModel):
    success: bool = True
    userId: str
