# app/core/policy.py

"""
Role and ownership rules for business and employee management.

Every decision goes through ``authorize(actor, action, resource)``. ``actor``
is an :class:`~app.schemas.user.Identity` whose ``business_id`` has been read
from the store, not from the token, so a stale token cannot widen access.
"""

import enum

from app.core.errors import Forbidden
from app.models.users import UserRole
from app.schemas.user import Identity


class Action(str, enum.Enum):
    add_employee = "add_employee"
    update_employee = "update_employee"
    delete_employee = "delete_employee"
    list_employees = "list_employees"
    update_business = "update_business"


def _require_admin_with_business(actor: Identity, message: str) -> None:
    if actor.role != UserRole.business_admin or actor.business_id is None:
        raise Forbidden(message)


def authorize(actor: Identity, action: Action, resource=None, *, changes: dict | None = None) -> None:
    """Raise Forbidden unless ``actor`` may perform ``action`` on ``resource``.

    resource is the target employee row for update_employee and the queried
    business id for list_employees; other actions take none.
    """
    changes = changes or {}

    if action == Action.add_employee:
        _require_admin_with_business(
            actor, "Unauthorized: Only business admins can add employees."
        )

    elif action == Action.delete_employee:
        _require_admin_with_business(
            actor, "Unauthorized: Only business admins can delete employees."
        )

    elif action == Action.update_business:
        if actor.role != UserRole.business_admin:
            raise Forbidden(
                "Unauthorized: Only business admins can update business details."
            )

    elif action == Action.update_employee:
        if actor.role == UserRole.business_admin:
            if actor.business_id is None or actor.business_id != resource.business_id:
                raise Forbidden(
                    "Unauthorized: You can only update employees in your business."
                )
        elif actor.role == UserRole.employee:
            if actor.id != resource.id:
                raise Forbidden(
                    "Unauthorized: Employees can only update their own profile."
                )
            if changes.get("password"):
                raise Forbidden("Employees cannot update their password.")
        else:
            raise Forbidden("Unauthorized: Access denied.")

    elif action == Action.list_employees:
        # Only admins are checked for ownership. Plain users and employees
        # can list any business, kept as-is from the existing API contract.
        if actor.role == UserRole.business_admin and actor.business_id != resource:
            raise Forbidden("Unauthorized: You don't have access to this business.")

    else:
        raise Forbidden("Unauthorized: Access denied.")
