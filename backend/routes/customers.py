# backend/routes/customers.py
from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from database import get_db
from models.users import CUSTOMER_MANAGERS
from schemas.customer import CustomerCreate, CustomerResponse, CustomerUpdate
from services import customers as customer_service
from utils.audit import write_log
from utils.tokenJWT import TokenClaims, role_required

router = APIRouter(prefix="/api/customers", tags=["Customers"])

# Sales team and administrators
can_manage_customers = role_required(*CUSTOMER_MANAGERS)


@router.get("", response_model=List[CustomerResponse])
def list_customers(db: Session = Depends(get_db), current_user: TokenClaims = Depends(can_manage_customers)):
    return customer_service.list_customers(db)


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(customer_id: int, db: Session = Depends(get_db), current_user: TokenClaims = Depends(can_manage_customers)):
    return customer_service.get_customer(db, customer_id)


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def create_customer(
    payload: CustomerCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(can_manage_customers),
):
    customer = customer_service.create_customer(db, payload, created_by=current_user.id)
    write_log(db, user_id=current_user.id, action="CUSTOMER_CREATE", resource="customers",
              request=request, meta={"id": customer.id})
    return customer


@router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: int,
    payload: CustomerUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(can_manage_customers),
):
    customer = customer_service.update_customer(db, customer_id, payload)
    write_log(db, user_id=current_user.id, action="CUSTOMER_UPDATE", resource="customers",
              request=request, meta={"id": customer.id})
    return customer


@router.delete("/{customer_id}")
def delete_customer(
    customer_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(can_manage_customers),
):
    customer_service.delete_customer(db, customer_id)
    write_log(db, user_id=current_user.id, action="CUSTOMER_DELETE", resource="customers",
              request=request, meta={"id": customer_id})
    return {"message": "Customer deleted successfully"}
