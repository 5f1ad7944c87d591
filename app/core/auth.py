# app/core/auth.py

from fastapi import Depends

from app.core.errors import Forbidden
from app.core.jwt import verify_access_token
from app.core.oauth2 import oauth2_scheme
from app.models.users import UserRole
from app.schemas.user import Identity


def authenticate(
    token: str | None = Depends(oauth2_scheme),
) -> Identity:
    # Identity comes from the token claims only, the stored auth_token is not read
    payload = verify_access_token(token)

    return Identity(
        id=int(payload["id"]),
        role=payload["role"],
        business_id=payload.get("business_id"),
    )


def require_business_admin(
    identity: Identity = Depends(authenticate),
) -> Identity:
    if identity.role != UserRole.business_admin:
        raise Forbidden("Access denied. Business admin role required.")
    return identity
