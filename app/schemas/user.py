from pydantic import BaseModel, EmailStr, Field, TypeAdapter, ValidationError

# Required-field checks live in the services so their messages match the API
# contract; the schemas only describe shape.


class SignUpRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    number: str | None = None
    address: str | None = None
    profile_photo: str | None = None


class EmailRequest(BaseModel):
    email: str | None = None


class OtpVerifyRequest(BaseModel):
    email: str | None = None
    otp: str | None = None


class ResetPasswordRequest(BaseModel):
    email: str | None = None
    new_password: str | None = None


class SignInRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UserPublic(BaseModel):
    id: int
    name: str
    email: str
    number: str | None = None
    address: str | None = None
    profile_photo: str | None = None
    role: str

    class Config:
        from_attributes = True


class Identity(BaseModel):
    """Authenticated caller, decoded from the bearer token."""

    id: int
    role: str
    business_id: int | None = Field(default=None)


_email_adapter = TypeAdapter(EmailStr)


def is_valid_email(email: str) -> bool:
    try:
        _email_adapter.validate_python(email)
    except ValidationError:
        return False
    return True
