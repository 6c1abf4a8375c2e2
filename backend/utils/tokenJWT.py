# utils/tokenJWT.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError, ExpiredSignatureError
from jose.utils import base64url_decode, base64url_encode
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel, ValidationError

from models.users import Role
from utils.errors import (
    AuthenticationRequired,
    InsufficientPermissions,
    RoleMissing,
    TokenExpired,
    TokenInvalid,
)

logger = logging.getLogger(__name__)


# A segment decodes the same whether or not its trailing pad bits are set;
# only the canonical spelling of each segment is accepted
def _is_canonical(token: str) -> bool:
    try:
        for segment in token.encode("ascii").split(b"."):
            if base64url_encode(base64url_decode(segment)) != segment:
                return False
    except ValueError:
        return False
    return True


# auto_error=False: a missing header or a non-Bearer scheme both arrive here as None
bearer_scheme = HTTPBearer(auto_error=False)


# Identity carried inside the token and attached to every authenticated request
class TokenClaims(BaseModel):
    id: int
    username: str
    role: Optional[str] = None
    full_name: Optional[str] = None


class TokenService:
    """Issues and verifies signed, time-bounded access tokens.

    The key is fixed for the lifetime of the process. There is no revocation
    list: a token stays valid until ``exp``.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 480):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    # Generate a new JWT access token
    def issue(self, claims: dict, expires_delta: Optional[timedelta] = None) -> str:
        to_encode = dict(claims)
        to_encode["sub"] = str(claims["username"])
        expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=self.expire_minutes))
        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        if not _is_canonical(token):
            raise TokenInvalid()

        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise TokenExpired()
        except JWTError:
            raise TokenInvalid()

        try:
            return TokenClaims.model_validate(payload)
        except ValidationError:
            # Signed by us but missing id/username: treat like any other bad token
            raise TokenInvalid()


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


# Authenticate the request from its Bearer token; no database round trip
def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    if credentials is None or not credentials.credentials:
        raise AuthenticationRequired()

    claims = tokens.verify(credentials.credentials)
    request.state.user = claims
    return claims


def check_role(claims: TokenClaims, allowed_roles) -> None:
    required = [Role(r).value for r in allowed_roles]
    if not claims.role:
        raise RoleMissing(required)

    try:
        role = Role(claims.role)
    except ValueError:
        logger.warning("token for %s carries unknown role %r", claims.username, claims.role)
        raise InsufficientPermissions(claims.role, required)

    if role not in allowed_roles:
        raise InsufficientPermissions(role.value, required)


# Dependency factory for Role-Based Access Control
def role_required(*allowed_roles: Role):
    def _checker(current_user: TokenClaims = Depends(get_current_user)) -> TokenClaims:
        check_role(current_user, allowed_roles)
        return current_user
    return _checker
