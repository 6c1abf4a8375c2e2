# backend/routes/auth.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from database import get_db
from schemas import user as schemas
from services import users as user_service
from utils.audit import write_log
from utils.errors import InvalidCredentials
from utils.hashing import PasswordHasher, get_hasher
from utils.tokenJWT import TokenClaims, TokenService, get_current_user, get_token_service

router = APIRouter(prefix="/api", tags=["Auth"])


# Authenticate user and issue JWT token
@router.post("/login", response_model=schemas.LoginResponse)
def login(
    payload: schemas.UserLogin,
    request: Request,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    try:
        db_user = user_service.authenticate(db, hasher, payload.username, payload.password)
    except InvalidCredentials:
        write_log(db, user_id=None, action="LOGIN", resource="auth", status="FAIL",
                  request=request, meta={"username": payload.username})
        raise

    claims = user_service.token_claims(db_user)
    access_token = tokens.issue(claims)

    # Log successful login event
    write_log(db, user_id=db_user.id, action="LOGIN", resource="auth",
              status="SUCCESS", request=request, meta={"username": db_user.username})

    return {"token": access_token, "token_type": "bearer", "user": claims}


# Identity of the caller as carried by its token
@router.get("/me", response_model=TokenClaims)
def me(current_user: TokenClaims = Depends(get_current_user)):
    return current_user
