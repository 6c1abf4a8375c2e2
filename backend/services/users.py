# backend/services/users.py
import logging
from typing import List

from sqlalchemy.orm import Session

from models.users import Role, User
from schemas.user import UserCreate, UserUpdate
from services.integrity import commit_or_duplicate
from utils.errors import InvalidCredentials, NotFound, ValidationFailed
from utils.hashing import PasswordHasher

logger = logging.getLogger(__name__)

DUPLICATE_USER = "Username or email already exists"
UNIQUE_FIELDS = ("username", "email")

# Columns that may never be set to NULL through an update
_REQUIRED_COLUMNS = {"username", "email", "role", "full_name"}

# Demo accounts seeded on first start, one per role; operators rotate the passwords
DEFAULT_USERS = (
    {"username": "admin", "email": "admin@company.com", "password": "admin123",
     "role": Role.ADMIN, "full_name": "System Administrator", "department": "IT"},
    {"username": "sales01", "email": "sales@company.com", "password": "sales123",
     "role": Role.SALES, "full_name": "Sales Representative", "department": "Sales"},
    {"username": "hr01", "email": "hr@company.com", "password": "hr123",
     "role": Role.HR, "full_name": "HR Officer", "department": "HR"},
)


def get_user_by_username(db: Session, username: str):
    return db.query(User).filter(User.username == username).first()


def authenticate(db: Session, hasher: PasswordHasher, username: str, password: str) -> User:
    """Return the user for a correct username/password pair.

    Unknown user and wrong password raise the same ``InvalidCredentials`` so
    the response never reveals which part was wrong.
    """
    user = get_user_by_username(db, username)
    if user is None or not hasher.verify(password, user.password_hash):
        raise InvalidCredentials()
    return user


def token_claims(user: User) -> dict:
    return {"id": user.id, "username": user.username, "role": user.role, "full_name": user.full_name}


def list_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()


def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFound("User not found")
    return user


def create_user(db: Session, hasher: PasswordHasher, data: UserCreate) -> User:
    user = User(
        username=data.username,
        email=str(data.email),
        password_hash=hasher.hash(data.password),
        role=Role(data.role).value,
        full_name=data.full_name,
        phone=data.phone,
        department=data.department,
    )
    db.add(user)
    commit_or_duplicate(db, DUPLICATE_USER, UNIQUE_FIELDS)
    db.refresh(user)
    logger.info("user %s created with role %s", user.username, user.role)
    return user


def update_user(db: Session, hasher: PasswordHasher, user_id: int, data: UserUpdate) -> User:
    user = get_user(db, user_id)
    changes = data.model_dump(exclude_unset=True)

    # Only a supplied password is re-hashed; otherwise the stored hash stays
    password = changes.pop("password", None)
    if password:
        user.password_hash = hasher.hash(password)

    for field, value in changes.items():
        if value is None and field in _REQUIRED_COLUMNS:
            continue
        if field == "role":
            value = Role(value).value
        elif field == "email":
            value = str(value)
        setattr(user, field, value)

    commit_or_duplicate(db, DUPLICATE_USER, UNIQUE_FIELDS)
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: int, acting_user_id: int) -> str:
    user = get_user(db, user_id)
    if user.id == acting_user_id:
        raise ValidationFailed("You cannot delete your own account", fields=["id"])

    # customers/employees/logs keep their rows; created_by goes NULL (ON DELETE SET NULL)
    username = user.username
    db.delete(user)
    db.commit()
    logger.info("user %s deleted", username)
    return username


def seed_default_users(db: Session, hasher: PasswordHasher) -> List[str]:
    """Create the demo admin/sales/hr accounts unless ``admin`` already exists."""
    if get_user_by_username(db, "admin") is not None:
        return []

    created = []
    for account in DEFAULT_USERS:
        if get_user_by_username(db, account["username"]) is not None:
            continue
        db.add(User(
            username=account["username"],
            email=account["email"],
            password_hash=hasher.hash(account["password"]),
            role=account["role"].value,
            full_name=account["full_name"],
            department=account["department"],
        ))
        created.append(account["username"])
    db.commit()
    return created
