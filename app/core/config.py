# app/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal

class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = False
    API_PREFIX: str = "/Avo"
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Security
    SECRET_KEY: str
    ALGORITHM: Literal["HS256"] = "HS256"
    SIGNIN_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    BUSINESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    PASSWORD_HASH_ROUNDS: int = 10

    # Database
    DATABASE_URL: str

    # Email (Resend)
    RESEND_API_KEY: str | None = None
    RESEND_FROM_EMAIL: str = "no-reply@avo.app"
    OTP_EMAIL_SUBJECT: str = "Your OTP Code"

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True

    # Always answer with transport 200 and keep the real status in the body
    LEGACY_TRANSPORT_STATUS: bool = False


    model_config = SettingsConfigDict(
        env_file=".env",
        extra="forbid",  
    )


settings = Settings()
