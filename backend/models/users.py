# backend/models/users.py
import enum
from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint, func
from database import Base


# Closed set of system roles; values are what the API and tokens carry
class Role(str, enum.Enum):
    ADMIN = "admin"
    SALES = "sales"
    HR = "hr"


# Role sets declared by each route family
USER_ADMINS = (Role.ADMIN,)
CUSTOMER_MANAGERS = (Role.SALES, Role.ADMIN)
EMPLOYEE_MANAGERS = (Role.HR, Role.ADMIN)


# Represents a user account with authentication details and system role
class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "role IN ({})".format(", ".join(f"'{r.value}'" for r in Role)),
            name="ck_users_role",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False)
    full_name = Column(String(255), nullable=False)
    phone = Column(String(20), nullable=True)
    department = Column(String(100), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
