# backend/services/customers.py
from typing import List

from sqlalchemy.orm import Session

from models.customer import Customer
from schemas.customer import CustomerCreate, CustomerUpdate
from utils.errors import NotFound

DEFAULT_STATUS = "active"

_REQUIRED_COLUMNS = {"customer_name", "status"}


# Newest first; id breaks ties between rows created in the same second
def list_customers(db: Session) -> List[Customer]:
    return db.query(Customer).order_by(Customer.created_at.desc(), Customer.id.desc()).all()


def get_customer(db: Session, customer_id: int) -> Customer:
    customer = db.query(Customer).filter(Customer.id == customer_id).first()
    if customer is None:
        raise NotFound("Customer not found")
    return customer


def create_customer(db: Session, data: CustomerCreate, created_by: int) -> Customer:
    values = data.model_dump()
    values["status"] = values.get("status") or DEFAULT_STATUS
    customer = Customer(**values, created_by=created_by)
    db.add(customer)
    db.commit()
    db.refresh(customer)
    return customer


def update_customer(db: Session, customer_id: int, data: CustomerUpdate) -> Customer:
    customer = get_customer(db, customer_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field in _REQUIRED_COLUMNS:
            continue
        setattr(customer, field, value)
    db.commit()
    db.refresh(customer)
    return customer


def delete_customer(db: Session, customer_id: int) -> None:
    customer = get_customer(db, customer_id)
    db.delete(customer)
    db.commit()
