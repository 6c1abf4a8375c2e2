from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime

from schemas.common import NonEmptyStr, OptionalText


# Schema for creating a customer; created_by always comes from the token
class CustomerCreate(BaseModel):
    customer_name: NonEmptyStr
    company_name: OptionalText = None
    email: OptionalText = None
    phone: OptionalText = None
    address: OptionalText = None
    contact_person: OptionalText = None
    status: OptionalText = None


# Schema for partial customer updates
class CustomerUpdate(BaseModel):
    customer_name: Optional[NonEmptyStr] = None
    company_name: OptionalText = None
    email: OptionalText = None
    phone: OptionalText = None
    address: OptionalText = None
    contact_person: OptionalText = None
    status: OptionalText = None


class CustomerResponse(BaseModel):
    id: int
    customer_name: str
    company_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    contact_person: Optional[str] = None
    status: str
    created_by: Optional[int] = None
    created_by_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
