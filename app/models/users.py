# app/models/users.py

import enum

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Boolean, Text
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.database import Base


class UserRole(str, enum.Enum):
    user = "user"
    employee = "employee"
    business_admin = "business_admin"


DEFAULT_ADDRESS = "Not Provided"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    # Uniqueness is enforced here, signup/add-employee rely on the IntegrityError
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)

    number = Column(String, nullable=True)
    address = Column(String, nullable=False, default=DEFAULT_ADDRESS)
    profile_photo = Column(String, nullable=True)

    role = Column(String, nullable=False, default=UserRole.user.value)

    # employee and business_admin rows always carry a business
    business_id = Column(
        Integer,
        ForeignKey("businesses.id", use_alter=True, name="fk_users_business_id"),
        nullable=True,
        index=True,
    )

    # Pending one-time code, shared by signup verification and password reset
    otp = Column(String(6), nullable=True)
    is_verified = Column(Boolean, default=False, nullable=False)

    # Last issued token. Cache only, never consulted when verifying
    auth_token = Column(Text, nullable=True)
    refresh_token = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    business = relationship("Business", foreign_keys=[business_id])
