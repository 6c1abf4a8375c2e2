from pydantic import BaseModel, BeforeValidator, ConfigDict, EmailStr, Field, StringConstraints
from typing import Annotated, Optional
from datetime import date, datetime
from decimal import Decimal

from schemas.common import NonEmptyStr, OptionalText, blank_to_none

# Staff code such as EMP001
EmployeeCode = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=20)]

OptionalEmail = Annotated[Optional[EmailStr], BeforeValidator(blank_to_none)]
Salary = Annotated[Decimal, Field(ge=0, max_digits=10, decimal_places=2)]
OptionalSalary = Annotated[Optional[Salary], BeforeValidator(blank_to_none)]
OptionalDate = Annotated[Optional[date], BeforeValidator(blank_to_none)]


# Schema for registering a new employee
class EmployeeCreate(BaseModel):
    employee_id: EmployeeCode
    first_name: NonEmptyStr
    last_name: NonEmptyStr
    email: OptionalEmail = None
    phone: OptionalText = None
    position: OptionalText = None
    department: OptionalText = None
    salary: OptionalSalary = None
    hire_date: OptionalDate = None
    status: OptionalText = None


# Schema for partial employee updates
class EmployeeUpdate(BaseModel):
    employee_id: Optional[EmployeeCode] = None
    first_name: Optional[NonEmptyStr] = None
    last_name: Optional[NonEmptyStr] = None
    email: OptionalEmail = None
    phone: OptionalText = None
    position: OptionalText = None
    department: OptionalText = None
    salary: OptionalSalary = None
    hire_date: OptionalDate = None
    status: OptionalText = None


class EmployeeResponse(BaseModel):
    id: int
    employee_id: str
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    salary: Optional[Decimal] = None
    hire_date: Optional[date] = None
    status: str
    created_by: Optional[int] = None
    created_by_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
