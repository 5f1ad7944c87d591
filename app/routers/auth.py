from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.rate_limiter import limiter
from app.core.responses import ok
from app.schemas.user import (
    EmailRequest,
    OtpVerifyRequest,
    ResetPasswordRequest,
    SignInRequest,
    SignUpRequest,
)
from app.services import accounts

router = APIRouter(tags=["Authentication"])


# ---------------- SIGNUP ----------------
@router.post("/SignUp")
@limiter.limit("3/minute")
def signup(request: Request, user_data: SignUpRequest, db: Session = Depends(get_db)):
    user_id = accounts.sign_up(
        db,
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
        number=user_data.number,
        address=user_data.address,
        profile_photo=user_data.profile_photo,
    )

    return ok("User added successfully", userId=user_id)


# ---------------- OTP ----------------
@router.post("/resend-otp")
@limiter.limit("3/minute")
def resend_otp(request: Request, payload: EmailRequest, db: Session = Depends(get_db)):
    accounts.resend_otp(db, payload.email)
    return ok("OTP resent successfully.")


@router.post("/verify-otp")
@limiter.limit("5/minute")
def verify_otp(request: Request, payload: OtpVerifyRequest, db: Session = Depends(get_db)):
    accounts.verify_otp(db, payload.email, payload.otp)
    return ok("OTP verified successfully. Account activated.")


# ---------------- FORGOT PASSWORD ----------------
@router.post("/forgot-password")
@limiter.limit("3/minute")
def forgot_password(request: Request, payload: EmailRequest, db: Session = Depends(get_db)):
    accounts.forgot_password(db, payload.email)
    return ok("OTP sent successfully.")


@router.post("/verify-forgot-password-otp")
@limiter.limit("5/minute")
def verify_forgot_password_otp(request: Request, payload: OtpVerifyRequest, db: Session = Depends(get_db)):
    accounts.verify_forgot_password_otp(db, payload.email, payload.otp)
    return ok("OTP verified. You can reset your password.")


# ---------------- RESET PASSWORD ----------------
@router.post("/reset-password")
def reset_password(payload: ResetPasswordRequest, db: Session = Depends(get_db)):
    accounts.reset_password(db, payload.email, payload.new_password)
    return ok("Password reset successfully.")


# ---------------- SIGNIN ----------------
@router.post("/signin")
@limiter.limit("5/minute")
def signin(request: Request, credentials: SignInRequest, db: Session = Depends(get_db)):
    result = accounts.sign_in(db, credentials.email, credentials.password)
    return ok("Sign in successful.", **result)
