# app/routers/business.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import authenticate
from app.core.responses import ok
from app.schemas.business import BusinessRequest, EmployeeCreate, EmployeeUpdate
from app.schemas.user import Identity
from app.services import business as business_service

router = APIRouter(tags=["Business"])


@router.post("/register-business")
def register_business(
    payload: BusinessRequest,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(authenticate),
):
    result = business_service.register_or_update_business(
        db,
        actor_id=current_user.id,
        actor_role=current_user.role,
        business_id=payload.business_id,
        name=payload.business_name,
        address=payload.business_address,
        logo=payload.logo,
    )

    if payload.business_id:
        return ok("Business updated successfully.")

    return ok("Business registered successfully.", **result)


@router.get("/employee-list")
def employee_list(
    business_id: int | None = None,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(authenticate),
):
    employees = business_service.list_employees_by_business(
        db,
        actor_id=current_user.id,
        actor_role=current_user.role,
        business_id=business_id,
    )

    return ok("Employees fetched successfully.", employees=employees)


@router.post("/add-employee")
def add_employee(
    payload: EmployeeCreate,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(authenticate),
):
    employee_id = business_service.add_employee(
        db,
        admin_id=current_user.id,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        number=payload.number,
        address=payload.address,
        profile_photo=payload.profile_photo,
    )

    return ok("Employee added successfully", employee_id=employee_id)


@router.put("/update-employee")
def update_employee(
    payload: EmployeeUpdate,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(authenticate),
):
    business_service.update_employee(
        db,
        actor_id=current_user.id,
        actor_role=current_user.role,
        employee_id=payload.employee_id,
        name=payload.name,
        email=payload.email,
        number=payload.number,
        address=payload.address,
        profile_photo=payload.profile_photo,
        password=payload.password,
    )

    return ok("Employee updated successfully.")


@router.delete("/delete-employees")
def delete_employee(
    employee_id: int | None = None,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(authenticate),
):
    business_service.delete_employee(
        db,
        admin_id=current_user.id,
        employee_id=employee_id,
    )

    return ok("Employee deleted successfully.")
