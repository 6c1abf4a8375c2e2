# backend/database.py
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from fastapi import Request

Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    # Konfiguracja zależna od bazy
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}  # Tylko dla SQLite
    else:
        connect_args = {}  # Puste dla PostgreSQL

    engine = create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)

    if engine.dialect.name == "sqlite":
        # SQLite ignores ON DELETE rules unless foreign keys are switched on per connection
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request):
    db: Session = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine):
    # Import modeli, żeby zarejestrować tabele w Base.metadata
    import models.users  # noqa: F401
    import models.customer  # noqa: F401
    import models.employee  # noqa: F401
    import models.log  # noqa: F401

    Base.metadata.create_all(bind=engine)
