# backend/routes/users.py
from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from database import get_db
from models.users import USER_ADMINS
from schemas.user import UserCreate, UserResponse, UserUpdate
from services import users as user_service
from utils.audit import write_log
from utils.hashing import PasswordHasher, get_hasher
from utils.tokenJWT import TokenClaims, role_required

router = APIRouter(prefix="/api/users", tags=["Users"])

admin_only = role_required(*USER_ADMINS)


# Retrieve all users, newest first (Admin only)
@router.get("", response_model=List[UserResponse])
def get_all_users(db: Session = Depends(get_db), current_user: TokenClaims = Depends(admin_only)):
    return user_service.list_users(db)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: Session = Depends(get_db), current_user: TokenClaims = Depends(admin_only)):
    return user_service.get_user(db, user_id)


# Create a user account with a hashed password (Admin only)
@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    request: Request,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
    current_user: TokenClaims = Depends(admin_only),
):
    user = user_service.create_user(db, hasher, payload)
    write_log(db, user_id=current_user.id, action="USER_CREATE", resource="users",
              request=request, meta={"id": user.id, "username": user.username, "role": user.role})
    return user


# Update profile fields, role and optionally the password (Admin only)
@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    payload: UserUpdate,
    request: Request,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
    current_user: TokenClaims = Depends(admin_only),
):
    user = user_service.update_user(db, hasher, user_id, payload)
    write_log(db, user_id=current_user.id, action="USER_UPDATE", resource="users", request=request,
              meta={"id": user.id, "fields": sorted(payload.model_dump(exclude_unset=True).keys())})
    return user


# Delete a user account (Admin only)
@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(admin_only),
):
    username = user_service.delete_user(db, user_id, acting_user_id=current_user.id)
    write_log(db, user_id=current_user.id, action="USER_DELETE", resource="users",
              request=request, meta={"id": user_id, "username": username})
    return {"message": "User deleted successfully"}
