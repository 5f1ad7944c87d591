from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError
from app.core.config import settings
from app.core.errors import Unauthorized

SIGNIN_TOKEN_LIFETIME = timedelta(minutes=settings.SIGNIN_TOKEN_EXPIRE_MINUTES)
BUSINESS_TOKEN_LIFETIME = timedelta(minutes=settings.BUSINESS_TOKEN_EXPIRE_MINUTES)


def create_access_token(
    user_id: int,
    role: str,
    business_id: int | None = None,
    expires_delta: timedelta = SIGNIN_TOKEN_LIFETIME,
) -> str:
    to_encode = {"id": user_id, "role": role}
    if business_id is not None:
        to_encode["business_id"] = business_id

    expire = datetime.now(timezone.utc) + expires_delta
    to_encode.update({"exp": expire, "type": "access"})

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def create_signin_token(user_id: int, role: str, business_id: int | None = None) -> str:
    return create_access_token(user_id, role, business_id, SIGNIN_TOKEN_LIFETIME)


def create_business_token(user_id: int, business_id: int) -> str:
    return create_access_token(user_id, "business_admin", business_id, BUSINESS_TOKEN_LIFETIME)


def decode_access_token(token: str):
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
        
        # Ensure the token type is "access"
        if payload.get("type") != "access":
            return None
        
        return payload
    
    except JWTError:
        return None


def verify_access_token(token: str | None) -> dict:
    """Return the claims of a valid token or raise Unauthorized."""
    if not token:
        raise Unauthorized("Access denied. No token provided.")

    payload = decode_access_token(token)

    if payload is None:
        raise Unauthorized("Invalid or expired token")

    if payload.get("id") is None or payload.get("role") is None:
        raise Unauthorized("Invalid token payload")

    return payload
