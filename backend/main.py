# backend/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from config import Settings, get_settings
from database import build_engine, build_session_factory, init_db
from services.users import seed_default_users
from utils.errors import register_exception_handlers
from utils.hashing import PasswordHasher
from utils.logging_setup import configure_logging
from utils.tokenJWT import TokenService

# Import routerów
from routes.auth import router as auth_router
from routes.users import router as users_router
from routes.customers import router as customers_router
from routes.employees import router as employees_router
from routes.logs import router as logs_router

logger = logging.getLogger(__name__)


def _bootstrap(app: FastAPI, settings: Settings) -> None:
    # Any failure here (store unreachable, bad schema) aborts startup
    init_db(app.state.engine)
    if not settings.SEED_DEFAULT_USERS:
        return
    db = app.state.session_factory()
    try:
        created = seed_default_users(db, app.state.hasher)
    finally:
        db.close()
    if created:
        logger.warning("Seeded default accounts %s; rotate their passwords", ", ".join(created))
    else:
        logger.info("Default accounts already present")


@asynccontextmanager
async def lifespan(app: FastAPI):
    _bootstrap(app, app.state.settings)
    yield
    app.state.engine.dispose()
    logger.info("Database connections closed")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Back Office API", version="1.0.0", lifespan=lifespan)

    # Process-wide state, built once and shared by every request
    app.state.settings = settings
    app.state.engine = build_engine(settings.database_url)
    app.state.session_factory = build_session_factory(app.state.engine)
    app.state.hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
    app.state.token_service = TokenService(
        secret_key=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )

    # CORS Configuration
    origins = ["http://localhost:3000", "http://127.0.0.1:3000"]
    if settings.FRONTEND_URL:
        origins.append(settings.FRONTEND_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("request %s %s", request.method, request.url.path)
        response = await call_next(request)
        logger.info("response %s %s status %s", request.method, request.url.path, response.status_code)
        return response

    register_exception_handlers(app)

    # Rejestracja routerów
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(customers_router)
    app.include_router(employees_router)
    app.include_router(logs_router)

    @app.get("/api/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
