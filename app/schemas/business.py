from pydantic import BaseModel


class BusinessRequest(BaseModel):
    business_id: int | None = None
    business_name: str | None = None
    business_address: str | None = None
    logo: str | None = None


class EmployeeCreate(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    number: str | None = None
    address: str | None = None
    profile_photo: str | None = None


class EmployeeUpdate(BaseModel):
    employee_id: int | None = None
    name: str | None = None
    email: str | None = None
    number: str | None = None
    address: str | None = None
    profile_photo: str | None = None
    password: str | None = None


class EmployeeResponse(BaseModel):
    id: int
    name: str
    email: str
    number: str | None = None
    address: str | None = None
    profile_photo: str | None = None

    class Config:
        from_attributes = True
