import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LEGACY_TRANSPORT_STATUS"] = "false"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"
os.environ.pop("RESEND_API_KEY", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database import Base, get_db
from app.core import email
from app.core.hashing import hash_password
from app.models.business import Business
from app.models.users import User, UserRole


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def outbox(monkeypatch):
    """Collects (to_email, otp) pairs instead of calling the email provider."""
    sent = []

    def fake_send_otp_email(to_email, otp):
        sent.append((to_email, otp))

    monkeypatch.setattr(email, "send_otp_email", fake_send_otp_email)
    return sent


@pytest.fixture
def make_user(db):
    def _make_user(
        email,
        *,
        name="Test User",
        password="pw123",
        role=UserRole.user.value,
        business_id=None,
        is_verified=True,
        otp=None,
    ):
        user = User(
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=role,
            business_id=business_id,
            is_verified=is_verified,
            otp=otp,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_business(db, make_user):
    """Creates an admin user owning a fresh business; returns (admin, business)."""

    def _make_business(admin_email, name="Shop"):
        admin = make_user(admin_email, role=UserRole.business_admin.value)
        business = Business(name=name, owner_id=admin.id)
        db.add(business)
        db.flush()
        admin.business_id = business.id
        db.commit()
        db.refresh(admin)
        return admin, business

    return _make_business
