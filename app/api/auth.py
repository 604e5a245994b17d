"""
app/api/auth.py

Purpose: OTP authentication endpoints

- POST /send-otp   issue a code for a mobile number
- POST /verify-otp check a code and return the user id
"""

from fastapi import APIRouter, Depends

from app.core.context import AppContext, get_context
from app.schemas.auth import SendOtpRequest, SendOtpResponse, VerifyOtpRequest, VerifyOtpResponse
from app.services import auth_service

router = APIRouter()


@router.post("/send-otp", response_model=SendOtpResponse, response_model_exclude_none=True)
async def send_otp(body: SendOtpRequest, ctx: AppContext = Depends(get_context)):
    """
    Issues a one-time code. The code is echoed back only when
    OTP exposure is enabled (development by default).
    """
    result = await auth_service.send_code(ctx.users, body.mobile, ctx.settings, ctx.sms)

    response = {"message": "OTP sent"}
    if ctx.settings.expose_otp:
        response["otp"] = result["otp"]
    return response


@router.post("/verify-otp", response_model=VerifyOtpResponse)
async def verify_otp(body: VerifyOtpRequest, ctx: AppContext = Depends(get_context)):
    user_id = await auth_service.verify_code(ctx.users, body.mobile, body.otp)
    return {"success": True, "userId": user_id}
