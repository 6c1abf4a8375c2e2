# backend/routes/employees.py
from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from database import get_db
from models.users import EMPLOYEE_MANAGERS
from schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from services import employees as employee_service
from utils.audit import write_log
from utils.tokenJWT import TokenClaims, role_required

router = APIRouter(prefix="/api/employees", tags=["Employees"])

# HR and administrators
can_manage_employees = role_required(*EMPLOYEE_MANAGERS)


@router.get("", response_model=List[EmployeeResponse])
def list_employees(db: Session = Depends(get_db), current_user: TokenClaims = Depends(can_manage_employees)):
    return employee_service.list_employees(db)


@router.get("/{employee_pk}", response_model=EmployeeResponse)
def get_employee(employee_pk: int, db: Session = Depends(get_db), current_user: TokenClaims = Depends(can_manage_employees)):
    return employee_service.get_employee(db, employee_pk)


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
def create_employee(
    payload: EmployeeCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(can_manage_employees),
):
    employee = employee_service.create_employee(db, payload, created_by=current_user.id)
    write_log(db, user_id=current_user.id, action="EMPLOYEE_CREATE", resource="employees",
              request=request, meta={"id": employee.id, "employee_id": employee.employee_id})
    return employee


@router.put("/{employee_pk}", response_model=EmployeeResponse)
def update_employee(
    employee_pk: int,
    payload: EmployeeUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(can_manage_employees),
):
    employee = employee_service.update_employee(db, employee_pk, payload)
    write_log(db, user_id=current_user.id, action="EMPLOYEE_UPDATE", resource="employees",
              request=request, meta={"id": employee.id})
    return employee


@router.delete("/{employee_pk}")
def delete_employee(
    employee_pk: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(can_manage_employees),
):
    employee_service.delete_employee(db, employee_pk)
    write_log(db, user_id=current_user.id, action="EMPLOYEE_DELETE", resource="employees",
              request=request, meta={"id": employee_pk})
    return {"message": "Employee deleted successfully"}
