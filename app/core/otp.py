# =========================================================
# OTP SERVICE
# - Six digit codes, one pending code per user record
# - Same field serves signup verification and password reset
# - Delivery failures are logged, never raised
# =========================================================

import logging
import secrets

import requests
from sqlalchemy.orm import Session

from app.core import email
from app.core.errors import InvalidCode, NotFound
from app.models.users import User

logger = logging.getLogger("app")


def generate_otp() -> str:
    return str(100000 + secrets.randbelow(900000))


def send_otp(to_email: str, otp: str) -> bool:
    try:
        email.send_otp_email(to_email, otp)
    except (email.EmailDeliveryError, requests.RequestException) as exc:
        logger.error(f"OTP delivery to {to_email} failed: {exc}")
        return False
    return True


def issue_and_send(db: Session, to_email: str) -> None:
    """Replace the pending code of the user addressed by ``to_email`` and mail it."""
    user = db.query(User).filter(User.email == to_email).first()

    if not user:
        raise NotFound("User not found.")

    otp = generate_otp()
    user.otp = otp
    db.commit()

    send_otp(to_email, otp)


def verify_otp(db: Session, to_email: str, submitted: str) -> User:
    # Clearing the code is left to the caller
    user = db.query(User).filter(User.email == to_email).first()

    if not user:
        raise NotFound("User not found.")

    if user.otp is None or user.otp != submitted:
        raise InvalidCode("Invalid OTP.")

    return user
