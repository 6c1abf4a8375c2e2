from pydantic import BaseModel, EmailStr, ConfigDict
from typing import Optional
from datetime import datetime

from models.users import Role
from schemas.common import NonEmptyStr, OptionalText


# Schema for user authentication credentials
class UserLogin(BaseModel):
    username: str
    password: str


# Public part of the identity, as embedded in the token
class UserBrief(BaseModel):
    id: int
    username: str
    role: str
    full_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# Schema for the login response: bearer token plus sanitized user
class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserBrief


# Schema for administrative user creation
class UserCreate(BaseModel):
    username: NonEmptyStr
    email: EmailStr
    password: NonEmptyStr
    role: Role
    full_name: NonEmptyStr
    phone: OptionalText = None
    department: OptionalText = None


# Partial update; password is re-hashed only when present
class UserUpdate(BaseModel):
    username: Optional[NonEmptyStr] = None
    email: Optional[EmailStr] = None
    password: Optional[NonEmptyStr] = None
    role: Optional[Role] = None
    full_name: Optional[NonEmptyStr] = None
    phone: OptionalText = None
    department: OptionalText = None


# Output schema for user profile details (never carries the password hash)
class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    role: str
    full_name: str
    phone: Optional[str] = None
    department: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
