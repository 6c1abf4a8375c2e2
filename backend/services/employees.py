# backend/services/employees.py
from typing import List

from sqlalchemy.orm import Session

from models.employee import Employee
from schemas.employee import EmployeeCreate, EmployeeUpdate
from services.integrity import commit_or_duplicate
from utils.errors import NotFound

DEFAULT_STATUS = "active"
DUPLICATE_EMPLOYEE = "Employee ID or email already exists"
UNIQUE_FIELDS = ("employee_id", "email")

_REQUIRED_COLUMNS = {"employee_id", "first_name", "last_name", "status"}


def list_employees(db: Session) -> List[Employee]:
    return db.query(Employee).order_by(Employee.created_at.desc(), Employee.id.desc()).all()


def get_employee(db: Session, employee_pk: int) -> Employee:
    employee = db.query(Employee).filter(Employee.id == employee_pk).first()
    if employee is None:
        raise NotFound("Employee not found")
    return employee


def create_employee(db: Session, data: EmployeeCreate, created_by: int) -> Employee:
    """Insert a new employee stamped with the acting user.

    A taken ``employee_id`` or email surfaces as ``DuplicateEntry``; under
    concurrent inserts the unique index lets exactly one through.
    """
    values = data.model_dump()
    if values.get("email") is not None:
        values["email"] = str(values["email"])
    values["status"] = values.get("status") or DEFAULT_STATUS
    employee = Employee(**values, created_by=created_by)
    db.add(employee)
    commit_or_duplicate(db, DUPLICATE_EMPLOYEE, UNIQUE_FIELDS)
    db.refresh(employee)
    return employee


def update_employee(db: Session, employee_pk: int, data: EmployeeUpdate) -> Employee:
    employee = get_employee(db, employee_pk)
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field in _REQUIRED_COLUMNS:
            continue
        if field == "email" and value is not None:
            value = str(value)
        setattr(employee, field, value)
    commit_or_duplicate(db, DUPLICATE_EMPLOYEE, UNIQUE_FIELDS)
    db.refresh(employee)
    return employee


def delete_employee(db: Session, employee_pk: int) -> None:
    employee = get_employee(db, employee_pk)
    db.delete(employee)
    db.commit()
