import os
import sys
import logging
from datetime import date
from decimal import Decimal

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from sqlalchemy.orm import Session

from config import get_settings
from database import build_engine, build_session_factory, init_db
from models.customer import Customer
from models.employee import Employee
from models.users import User
from services.users import seed_default_users
from utils.hashing import PasswordHasher
from utils.logging_setup import configure_logging

logger = logging.getLogger(__name__)

# Demo records, owned by the seeded admin account
SAMPLE_CUSTOMERS = [
    {"customer_name": "ABC Company", "company_name": "ABC Company Ltd.", "email": "contact@abc-demo.com",
     "phone": "02-123-4567", "address": "123 Sukhumvit Rd, Khlong Toei, Bangkok 10110", "contact_person": "Somchai Jaidee"},
    {"customer_name": "XYZ Retail", "company_name": "XYZ Retail Co.", "email": "info@xyz-demo.com",
     "phone": "02-987-6543", "address": "456 Ratchadaphisek Rd, Chatuchak, Bangkok 10900", "contact_person": "Somying Khayan"},
    {"customer_name": "DEF Technology", "company_name": "DEF Technology Ltd.", "email": "hello@def-demo.com",
     "phone": "02-555-1234", "address": "789 Phahonyothin Rd, Phaya Thai, Bangkok 10400", "contact_person": "Prasert Keng"},
    {"customer_name": "GHI Partnership", "company_name": "GHI Partnership", "email": "support@ghi-demo.com",
     "phone": "02-777-8888", "address": "321 Phetchaburi Rd, Ratchathewi, Bangkok 10400", "contact_person": "Wimon Mana"},
]

SAMPLE_EMPLOYEES = [
    {"employee_id": "EMP001", "first_name": "Somchai", "last_name": "Jaidee", "email": "somchai@company-demo.com",
     "phone": "081-234-5678", "position": "Software Developer", "department": "IT",
     "salary": Decimal("45000.00"), "hire_date": date(2024, 1, 15)},
    {"employee_id": "EMP002", "first_name": "Somying", "last_name": "Khayan", "email": "somying@company-demo.com",
     "phone": "081-987-6543", "position": "Online Marketer", "department": "Marketing",
     "salary": Decimal("38000.00"), "hire_date": date(2024, 2, 1)},
    {"employee_id": "EMP003", "first_name": "Prasert", "last_name": "Kengmak", "email": "prasert@company-demo.com",
     "phone": "081-555-7777", "position": "Accountant", "department": "Finance",
     "salary": Decimal("42000.00"), "hire_date": date(2024, 3, 1)},
    {"employee_id": "EMP004", "first_name": "Wimon", "last_name": "Mana", "email": "wimon@company-demo.com",
     "phone": "081-999-1111", "position": "HR Manager", "department": "HR",
     "salary": Decimal("55000.00"), "hire_date": date(2023, 12, 1)},
    # Optional columns left empty on purpose
    {"employee_id": "EMP005", "first_name": "Ratchanee", "last_name": "Thamngan", "email": None,
     "phone": "081-666-2222", "position": "Assistant Manager", "department": "Operations",
     "salary": None, "hire_date": None},
]


def load_sample_data(session: Session) -> dict:
    """Insert demo customers and employees into empty tables.

    Each table is only filled when it has no rows yet, so the script can be
    re-run safely. Returns how many rows were added per table.
    """
    admin_user = session.query(User).filter(User.username == "admin").first()
    if not admin_user:
        raise RuntimeError("Admin account missing; start the API once or run with seeding enabled")

    added = {"customers": 0, "employees": 0}

    if session.query(Customer).first() is None:
        for row in SAMPLE_CUSTOMERS:
            session.add(Customer(**row, status="active", created_by=admin_user.id))
        added["customers"] = len(SAMPLE_CUSTOMERS)

    if session.query(Employee).first() is None:
        for row in SAMPLE_EMPLOYEES:
            session.add(Employee(**row, status="active", created_by=admin_user.id))
        added["employees"] = len(SAMPLE_EMPLOYEES)

    session.commit()
    return added


def main():
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    engine = build_engine(settings.database_url)
    init_db(engine)
    session = build_session_factory(engine)()
    try:
        seed_default_users(session, PasswordHasher(rounds=settings.BCRYPT_ROUNDS))
        added = load_sample_data(session)
    finally:
        session.close()
        engine.dispose()

    logger.info("Demo data: %s customers, %s employees added", added["customers"], added["employees"])


if __name__ == "__main__":
    main()
