# =========================================================
# BUSINESS & EMPLOYEE MANAGEMENT
# - Registration promotes the caller to business_admin
# - Employees are created pre-verified inside the admin's business
# - Every role/ownership decision goes through core.policy.authorize
# =========================================================

import logging

from sqlalchemy.orm import Session

from app.core.errors import BadRequest, Conflict, NotFound
from app.core.hashing import hash_password
from app.core.jwt import create_business_token
from app.core.policy import Action, authorize
from app.models.business import Business
from app.models.users import DEFAULT_ADDRESS, User, UserRole
from app.schemas.business import EmployeeResponse
from app.schemas.user import Identity, is_valid_email
from app.services.accounts import insert_user

logger = logging.getLogger("app")


def load_actor(db: Session, actor_id: int, role: str | None = None) -> Identity:
    """Identity for ``actor_id`` with the business affiliation read from the store.

    ``role`` overrides the stored role when the caller's token role should
    drive the decision.
    """
    actor = db.query(User).filter(User.id == actor_id).first()

    if actor is None:
        return Identity(id=actor_id, role=role or "", business_id=None)

    return Identity(
        id=actor.id,
        role=role or actor.role,
        business_id=actor.business_id,
    )


# ---------------- REGISTER / UPDATE BUSINESS ----------------
def register_or_update_business(
    db: Session,
    *,
    actor_id: int,
    actor_role: str,
    business_id: int | None = None,
    name: str | None = None,
    address: str | None = None,
    logo: str | None = None,
) -> dict:
    if business_id:
        return _update_business(
            db,
            actor_id=actor_id,
            actor_role=actor_role,
            business_id=business_id,
            name=name,
            address=address,
            logo=logo,
        )

    if not name:
        raise BadRequest("Business name is required.")

    user = db.query(User).filter(User.id == actor_id).first()

    if not user:
        raise NotFound("User not found.")

    if user.role == UserRole.business_admin:
        raise Conflict("User is already a business admin.")

    business = Business(
        name=name,
        owner_id=user.id,
        address=address or None,
        logo=logo or None,
    )
    db.add(business)
    db.flush()

    token = create_business_token(user.id, business.id)

    user.role = UserRole.business_admin.value
    user.business_id = business.id
    user.auth_token = token
    db.commit()

    logger.info(f"Business registered: business_id={business.id} owner_id={user.id}")

    return {"business_id": business.id, "auth_token": token}


def _update_business(
    db: Session,
    *,
    actor_id: int,
    actor_role: str,
    business_id: int,
    name: str | None,
    address: str | None,
    logo: str | None,
) -> dict:
    authorize(Identity(id=actor_id, role=actor_role), Action.update_business)

    business = (
        db.query(Business)
        .filter(
            Business.id == business_id,
            Business.owner_id == actor_id,
        )
        .first()
    )

    if not business:
        raise NotFound("Business not found or unauthorized.")

    business.name = name or business.name
    business.address = address or business.address
    business.logo = logo or business.logo
    db.commit()

    logger.info(f"Business updated: business_id={business.id}")

    return {"business_id": business.id}


# ---------------- EMPLOYEES ----------------
def add_employee(
    db: Session,
    *,
    admin_id: int,
    name: str | None,
    email: str | None,
    password: str | None,
    number: str | None = None,
    address: str | None = None,
    profile_photo: str | None = None,
) -> int:
    admin = load_actor(db, admin_id)
    authorize(admin, Action.add_employee)

    if not name or not email or not password:
        raise BadRequest("Name, email, and password are required.")

    if not is_valid_email(email):
        raise BadRequest("Invalid email format.")

    employee = insert_user(
        db,
        User(
            name=name,
            email=email,
            password_hash=hash_password(password),
            number=number or None,
            address=address or DEFAULT_ADDRESS,
            profile_photo=profile_photo or None,
            role=UserRole.employee.value,
            business_id=admin.business_id,
            is_verified=True,
        ),
    )

    logger.info(
        f"Employee added: employee_id={employee.id} business_id={admin.business_id}"
    )

    return employee.id


def update_employee(
    db: Session,
    *,
    actor_id: int,
    actor_role: str,
    employee_id: int | None,
    name: str | None = None,
    email: str | None = None,
    number: str | None = None,
    address: str | None = None,
    profile_photo: str | None = None,
    password: str | None = None,
) -> None:
    if not employee_id:
        raise BadRequest("Employee ID is required.")

    employee = (
        db.query(User)
        .filter(
            User.id == employee_id,
            User.role == UserRole.employee.value,
        )
        .first()
    )

    if not employee:
        raise NotFound("Employee not found.")

    actor = load_actor(db, actor_id, role=actor_role)
    authorize(actor, Action.update_employee, employee, changes={"password": password})

    # Email is the login identity and never changes
    if email and email != employee.email:
        raise BadRequest("Email cannot be updated.")

    if password and actor.role == UserRole.business_admin:
        employee.password_hash = hash_password(password)

    employee.name = name or employee.name
    employee.number = number or employee.number
    employee.address = address or employee.address
    employee.profile_photo = profile_photo or employee.profile_photo
    db.commit()

    logger.info(f"Employee updated: employee_id={employee.id} by user_id={actor_id}")


def delete_employee(db: Session, *, admin_id: int, employee_id: int | None) -> None:
    admin = load_actor(db, admin_id)
    authorize(admin, Action.delete_employee)

    if not employee_id:
        raise BadRequest("Employee ID is required.")

    employee = (
        db.query(User)
        .filter(
            User.id == employee_id,
            User.business_id == admin.business_id,
            User.role == UserRole.employee.value,
        )
        .first()
    )

    if not employee:
        raise NotFound("Employee not found or does not belong to your business.")

    db.delete(employee)
    db.commit()

    logger.info(
        f"Employee deleted: employee_id={employee_id} business_id={admin.business_id}"
    )


def list_employees_by_business(
    db: Session,
    *,
    actor_id: int,
    actor_role: str,
    business_id: int | None,
) -> list[dict]:
    if not business_id:
        raise BadRequest("Business ID is required.")

    actor = load_actor(db, actor_id, role=actor_role)
    authorize(actor, Action.list_employees, business_id)

    employees = (
        db.query(User)
        .filter(
            User.business_id == business_id,
            User.role == UserRole.employee.value,
        )
        .order_by(User.id)
        .all()
    )

    return [EmployeeResponse.model_validate(e).model_dump() for e in employees]
