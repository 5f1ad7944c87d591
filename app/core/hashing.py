# app/core/hashing.py

import bcrypt

from app.core.config import settings
from app.core.errors import BadRequest

# bcrypt only reads the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    encoded = password.encode("utf-8")

    if len(encoded) > MAX_PASSWORD_BYTES:
        raise BadRequest(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes.")

    return bcrypt.hashpw(
        encoded,
        bcrypt.gensalt(rounds=settings.PASSWORD_HASH_ROUNDS),
    ).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    # checkpw compares in constant time
    try:
        return bcrypt.checkpw(
            password.encode("utf-8"),
            password_hash.encode("utf-8"),
        )
    except ValueError:
        return False
