# =========================================================
# ACCOUNT LIFECYCLE
# unregistered -> pending verification (sign up)
#              -> verified (OTP match) <-> authenticated (sign in)
# forgot password: OTP issued -> OTP matched -> password replaced
# =========================================================

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core import otp as otp_service
from app.core.errors import BadRequest, Conflict, Forbidden, NotFound, Unauthorized
from app.core.hashing import hash_password, verify_password
from app.core.jwt import create_signin_token
from app.models.business import Business  # noqa: F401  (registers the mapper)
from app.models.users import DEFAULT_ADDRESS, User, UserRole
from app.schemas.user import UserPublic, is_valid_email

logger = logging.getLogger("app")


def _get_user_by_email(db: Session, email: str) -> User:
    user = db.query(User).filter(User.email == email).first()

    if not user:
        raise NotFound("User not found.")

    return user


def insert_user(db: Session, user: User) -> User:
    """Insert ``user``; a duplicate email surfaces as Conflict."""
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("Email already exists.")

    db.refresh(user)
    return user


# ---------------- SIGN UP ----------------
def sign_up(
    db: Session,
    *,
    name: str | None,
    email: str | None,
    password: str | None,
    number: str | None = None,
    address: str | None = None,
    profile_photo: str | None = None,
) -> int:
    if not name or not email or not password:
        raise BadRequest("Name, email, and password are required.")

    if not is_valid_email(email):
        raise BadRequest("Invalid email format.")

    otp = otp_service.generate_otp()

    user = insert_user(
        db,
        User(
            name=name,
            email=email,
            password_hash=hash_password(password),
            number=number or None,
            address=address or DEFAULT_ADDRESS,
            profile_photo=profile_photo or None,
            role=UserRole.user.value,
            otp=otp,
            is_verified=False,
            auth_token=None,
            refresh_token=None,
        ),
    )
    logger.info(f"User signed up: user_id={user.id}")

    # The record is kept even when the email cannot be delivered
    otp_service.send_otp(email, otp)

    return user.id


# ---------------- OTP ----------------
def resend_otp(db: Session, email: str | None) -> None:
    if not email:
        raise BadRequest("Email is required.")

    otp_service.issue_and_send(db, email)
    logger.info("Verification OTP re-issued")


def verify_otp(db: Session, email: str | None, otp: str | None) -> None:
    if not email or not otp:
        raise BadRequest("Email and OTP are required.")

    user = otp_service.verify_otp(db, email, otp)

    user.is_verified = True
    user.otp = None
    db.commit()

    logger.info(f"User verified: user_id={user.id}")


# ---------------- FORGOT / RESET PASSWORD ----------------
def forgot_password(db: Session, email: str | None) -> None:
    if not email:
        raise BadRequest("Email is required.")

    otp_service.issue_and_send(db, email)
    logger.info("Password reset OTP issued")


def verify_forgot_password_otp(db: Session, email: str | None, otp: str | None) -> None:
    # Consumes whatever code is pending: signup and reset codes share one field
    # and is_verified is left untouched.
    if not email or not otp:
        raise BadRequest("Email and OTP are required.")

    user = otp_service.verify_otp(db, email, otp)

    user.otp = None
    db.commit()

    logger.info(f"Password reset OTP accepted: user_id={user.id}")


def reset_password(db: Session, email: str | None, new_password: str | None) -> None:
    # Nothing here checks that verify_forgot_password_otp ran first; callers
    # are trusted to follow the flow.
    if not email or not new_password:
        raise BadRequest("Email and new password are required.")

    user = _get_user_by_email(db, email)

    user.password_hash = hash_password(new_password)
    db.commit()

    logger.info(f"Password reset: user_id={user.id}")


# ---------------- SIGN IN ----------------
def sign_in(db: Session, email: str | None, password: str | None) -> dict:
    if not email or not password:
        raise BadRequest("Email and password are required.")

    user = _get_user_by_email(db, email)

    if not user.is_verified:
        raise Forbidden("Account not verified. Please verify your email.")

    if not verify_password(password, user.password_hash):
        raise Unauthorized("Invalid credentials.")

    token = create_signin_token(user.id, user.role, user.business_id)

    user.auth_token = token
    db.commit()

    logger.info(f"User signed in: user_id={user.id} role={user.role}")

    return {
        "auth_token": token,
        "user": UserPublic.model_validate(user).model_dump(),
    }
