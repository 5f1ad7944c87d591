from datetime import datetime, timezone

import pytest
from jose import jwt

from app.core.errors import BadRequest, Conflict, Forbidden, NotFound
from app.core.hashing import verify_password
from app.core.jwt import decode_access_token
from app.models.business import Business
from app.models.users import User
from app.services import business as business_service


def _reload(db, model, pk):
    db.expire_all()
    return db.get(model, pk)


# ---------------- REGISTER / UPDATE BUSINESS ----------------

def test_register_business_promotes_user(db, make_user):
    user = make_user("owner@x.com")

    result = business_service.register_or_update_business(
        db, actor_id=user.id, actor_role="user", name="Cafe", address="Main St"
    )

    owner = _reload(db, User, user.id)
    business = _reload(db, Business, result["business_id"])
    assert owner.role == "business_admin"
    assert owner.business_id == business.id
    assert owner.auth_token == result["auth_token"]
    assert business.owner_id == user.id
    assert business.name == "Cafe"
    assert business.address == "Main St"

    claims = decode_access_token(result["auth_token"])
    assert claims["id"] == user.id
    assert claims["role"] == "business_admin"
    assert claims["business_id"] == business.id


def test_register_business_token_lasts_seven_days(db, make_user):
    user = make_user("owner@x.com")

    result = business_service.register_or_update_business(
        db, actor_id=user.id, actor_role="user", name="Cafe"
    )

    exp = jwt.get_unverified_claims(result["auth_token"])["exp"]
    remaining = exp - datetime.now(timezone.utc).timestamp()
    assert 6.9 * 86400 < remaining <= 7 * 86400


def test_register_business_twice_is_conflict(db, make_user):
    user = make_user("owner@x.com")
    business_service.register_or_update_business(
        db, actor_id=user.id, actor_role="user", name="Cafe"
    )

    with pytest.raises(Conflict):
        business_service.register_or_update_business(
            db, actor_id=user.id, actor_role="business_admin", name="Second"
        )

    assert db.query(Business).count() == 1


def test_register_business_requires_name_and_existing_user(db, make_user):
    user = make_user("owner@x.com")

    with pytest.raises(BadRequest):
        business_service.register_or_update_business(
            db, actor_id=user.id, actor_role="user", name=None
        )
    with pytest.raises(NotFound):
        business_service.register_or_update_business(
            db, actor_id=9999, actor_role="user", name="Ghost"
        )


def test_update_business_partial_fields(db, make_business):
    admin, business = make_business("boss@x.com", name="Cafe")
    business.address = "Old St"
    business.logo = "logo.png"
    db.commit()

    business_service.register_or_update_business(
        db,
        actor_id=admin.id,
        actor_role="business_admin",
        business_id=business.id,
        address="New St",
    )

    updated = _reload(db, Business, business.id)
    assert updated.name == "Cafe"
    assert updated.address == "New St"
    assert updated.logo == "logo.png"


def test_update_business_requires_admin_and_ownership(db, make_business, make_user):
    admin, business = make_business("boss@x.com")
    other_admin, _ = make_business("other@x.com")
    plain = make_user("plain@x.com")

    with pytest.raises(Forbidden):
        business_service.register_or_update_business(
            db, actor_id=plain.id, actor_role="user", business_id=business.id, name="X"
        )
    with pytest.raises(NotFound):
        business_service.register_or_update_business(
            db,
            actor_id=other_admin.id,
            actor_role="business_admin",
            business_id=business.id,
            name="X",
        )


# ---------------- ADD EMPLOYEE ----------------

def test_add_employee_creates_verified_employee(db, make_business):
    admin, business = make_business("boss@x.com")

    employee_id = business_service.add_employee(
        db,
        admin_id=admin.id,
        name="Eve",
        email="eve@x.com",
        password="secret",
        number="555",
    )

    employee = _reload(db, User, employee_id)
    assert employee.role == "employee"
    assert employee.is_verified is True
    assert employee.business_id == business.id
    assert employee.number == "555"
    assert employee.address == "Not Provided"
    assert employee.otp is None
    assert verify_password("secret", employee.password_hash)


def test_add_employee_rejects_non_admins(db, make_user):
    plain = make_user("plain@x.com")
    orphan_admin = make_user("orphan@x.com", role="business_admin")

    for actor in (plain, orphan_admin):
        with pytest.raises(Forbidden):
            business_service.add_employee(
                db, admin_id=actor.id, name="Eve", email="eve@x.com", password="pw"
            )


def test_add_employee_validation_and_conflict(db, make_business, make_user):
    admin, _ = make_business("boss@x.com")
    make_user("taken@x.com")

    with pytest.raises(BadRequest):
        business_service.add_employee(
            db, admin_id=admin.id, name="Eve", email=None, password="pw"
        )
    with pytest.raises(BadRequest):
        business_service.add_employee(
            db, admin_id=admin.id, name="Eve", email="bad-email", password="pw"
        )
    with pytest.raises(Conflict):
        business_service.add_employee(
            db, admin_id=admin.id, name="Eve", email="taken@x.com", password="pw"
        )


# ---------------- UPDATE EMPLOYEE ----------------

@pytest.fixture
def staffed(db, make_business, make_user):
    admin, business = make_business("boss@x.com")
    employee = make_user(
        "eve@x.com", name="Eve", role="employee", business_id=business.id
    )
    employee.number = "111"
    employee.address = "Home"
    db.commit()
    return admin, business, employee


def test_employee_updates_own_contact_fields(db, staffed):
    _, _, employee = staffed
    original_hash = employee.password_hash

    business_service.update_employee(
        db,
        actor_id=employee.id,
        actor_role="employee",
        employee_id=employee.id,
        number="222",
        address="Work",
        profile_photo="me.png",
    )

    updated = _reload(db, User, employee.id)
    assert updated.number == "222"
    assert updated.address == "Work"
    assert updated.profile_photo == "me.png"
    assert updated.name == "Eve"
    assert updated.email == "eve@x.com"
    assert updated.password_hash == original_hash


def test_employee_cannot_set_password(db, staffed):
    _, _, employee = staffed

    with pytest.raises(Forbidden):
        business_service.update_employee(
            db,
            actor_id=employee.id,
            actor_role="employee",
            employee_id=employee.id,
            number="999",
            password="hijack",
        )

    unchanged = _reload(db, User, employee.id)
    assert unchanged.number == "111"
    assert verify_password("pw123", unchanged.password_hash)


def test_email_is_immutable(db, staffed):
    admin, _, employee = staffed

    for actor_id, role in ((employee.id, "employee"), (admin.id, "business_admin")):
        with pytest.raises(BadRequest):
            business_service.update_employee(
                db,
                actor_id=actor_id,
                actor_role=role,
                employee_id=employee.id,
                email="new@x.com",
                name="Changed",
            )

    assert _reload(db, User, employee.id).name == "Eve"

    # Resubmitting the same email is not a change
    business_service.update_employee(
        db,
        actor_id=employee.id,
        actor_role="employee",
        employee_id=employee.id,
        email="eve@x.com",
        name="Eve B",
    )
    assert _reload(db, User, employee.id).name == "Eve B"


def test_admin_can_reset_employee_password(db, staffed):
    admin, _, employee = staffed

    business_service.update_employee(
        db,
        actor_id=admin.id,
        actor_role="business_admin",
        employee_id=employee.id,
        password="fresh",
    )

    assert verify_password("fresh", _reload(db, User, employee.id).password_hash)


def test_update_employee_authorization(db, staffed, make_business, make_user):
    _, business, employee = staffed
    other_admin, _ = make_business("other@x.com")
    coworker = make_user("co@x.com", role="employee", business_id=business.id)
    plain = make_user("plain@x.com")

    cases = [
        (other_admin.id, "business_admin"),
        (coworker.id, "employee"),
        (plain.id, "user"),
    ]
    for actor_id, role in cases:
        with pytest.raises(Forbidden):
            business_service.update_employee(
                db, actor_id=actor_id, actor_role=role, employee_id=employee.id, name="X"
            )


def test_update_employee_missing_or_unknown(db, staffed):
    admin, _, _ = staffed

    with pytest.raises(BadRequest):
        business_service.update_employee(
            db, actor_id=admin.id, actor_role="business_admin", employee_id=None
        )
    with pytest.raises(NotFound):
        business_service.update_employee(
            db, actor_id=admin.id, actor_role="business_admin", employee_id=9999
        )


# ---------------- DELETE EMPLOYEE ----------------

def test_delete_employee(db, staffed):
    admin, _, employee = staffed

    business_service.delete_employee(db, admin_id=admin.id, employee_id=employee.id)

    assert _reload(db, User, employee.id) is None


def test_delete_employee_of_other_business_is_not_found(db, staffed, make_business):
    _, _, employee = staffed
    other_admin, _ = make_business("other@x.com")

    with pytest.raises(NotFound):
        business_service.delete_employee(
            db, admin_id=other_admin.id, employee_id=employee.id
        )

    assert _reload(db, User, employee.id) is not None


def test_delete_employee_cannot_target_admin(db, staffed):
    admin, _, _ = staffed

    with pytest.raises(NotFound):
        business_service.delete_employee(db, admin_id=admin.id, employee_id=admin.id)


def test_delete_employee_requires_admin(db, staffed):
    _, _, employee = staffed

    with pytest.raises(Forbidden):
        business_service.delete_employee(db, admin_id=employee.id, employee_id=employee.id)
    with pytest.raises(BadRequest):
        business_service.delete_employee(db, admin_id=staffed[0].id, employee_id=None)


# ---------------- LIST EMPLOYEES ----------------

def test_list_employees_scoped_to_admins_business(db, staffed, make_business, make_user):
    admin, business, employee = staffed
    other_admin, other_business = make_business("other@x.com")
    make_user("stranger@x.com", role="employee", business_id=other_business.id)

    with pytest.raises(Forbidden):
        business_service.list_employees_by_business(
            db, actor_id=admin.id, actor_role="business_admin", business_id=other_business.id
        )

    employees = business_service.list_employees_by_business(
        db, actor_id=admin.id, actor_role="business_admin", business_id=business.id
    )

    assert employees == [
        {
            "id": employee.id,
            "name": "Eve",
            "email": "eve@x.com",
            "number": "111",
            "address": "Home",
            "profile_photo": None,
        }
    ]


def test_list_employees_does_not_check_non_admin_callers(db, staffed, make_user):
    _, business, employee = staffed
    plain = make_user("plain@x.com")

    employees = business_service.list_employees_by_business(
        db, actor_id=plain.id, actor_role="user", business_id=business.id
    )

    assert [e["id"] for e in employees] == [employee.id]


def test_list_employees_requires_business_id(db, staffed):
    admin, _, _ = staffed

    with pytest.raises(BadRequest):
        business_service.list_employees_by_business(
            db, actor_id=admin.id, actor_role="business_admin", business_id=None
        )
