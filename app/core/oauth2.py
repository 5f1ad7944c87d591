from fastapi.security import OAuth2PasswordBearer

from app.core.config import settings

# Reads "Authorization: Bearer <token>". auto_error is off so a missing token
# is reported through the response envelope instead of FastAPI's default body
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_PREFIX}/signin",
    auto_error=False,
)
