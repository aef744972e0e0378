"""FastAPI application entry point."""

import sys
import time
import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware
from dotenv import load_dotenv

# Load environment variables from .env file
# Must be called before importing modules that read env vars
load_dotenv()

# main.py is at <root>/src/api/main.py, src is two levels up
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.config import DEFAULT_JWT_SECRET, DEFAULT_SESSION_SECRET, Settings, get_settings
from api.dependencies import get_mock_test_ledger, get_user_repo
from api.errors import register_exception_handlers
from api.routes import analytics, auth, leaderboard, mock_tests, stats, users
from adapter.mongodb.connection import get_mongodb_client, is_configured, DATABASE_NAME
from adapter.mongodb.indexes import ensure_all_indexes
from port.mock_test_ledger import MockTestLedger
from port.user_repository import UserRepository
from utils.logging import setup_structured_logging

setup_structured_logging()

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
_project_root = _src_path.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "LEVEL UP Backend API"
FEATURES = [
    "Real Google OAuth",
    "JWT Authentication",
    "Mock Test Analytics",
    "Leaderboard System",
    "User Progress Tracking",
]

_started_at = time.monotonic()


def require_credentials(settings: Settings) -> None:
    """Exit with status 1 if the Google OAuth client id or secret is unset."""
    missing = settings.missing_required()
    if missing:
        logger.error("Missing required environment variables", extra={"missing": missing})
        sys.exit(1)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown logic.

    Startup aborts when Google credentials are missing, whichever server
    runs the app.
    """
    settings = get_settings()
    require_credentials(settings)
    if settings.jwt_secret == DEFAULT_JWT_SECRET:
        logger.warning("JWT_SECRET not set, using the built-in fallback secret")
    if settings.session_secret == DEFAULT_SESSION_SECRET:
        logger.warning("SESSION_SECRET not set, using the built-in fallback secret")

    if is_configured():
        client = get_mongodb_client()
        if client and ensure_all_indexes(client[DATABASE_NAME]):
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("MongoDB unavailable or index creation failed")
    else:
        logger.info("MONGO_URL not set, using in-memory storage (data is lost on restart)")

    logger.info("Service started", extra={
        "service": SERVICE_NAME,
        "environment": settings.environment,
        "frontendUrl": settings.frontend_url,
    })

    yield  # App runs here

    logger.info("Service shutting down")


_settings = get_settings()

# Create FastAPI app
app = FastAPI(
    title=SERVICE_NAME,
    description="Google sign-in, mock test tracking and score analytics",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
# Holds the OAuth state between /auth/google and its callback
app.add_middleware(
    SessionMiddleware,
    secret_key=_settings.session_secret,
    https_only=_settings.is_production,
    same_site="lax",
)

register_exception_handlers(app)

# Register routes
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(mock_tests.router)
app.include_router(analytics.router)
app.include_router(leaderboard.router)
app.include_router(stats.router)


@app.get("/", tags=["health"])
async def root(
    users_repo: UserRepository = Depends(get_user_repo),
    ledger: MockTestLedger = Depends(get_mock_test_ledger),
):
    """Health check with headline counts."""
    return {
        "status": "LEVEL UP Backend API Running",
        "version": VERSION,
        "environment": get_settings().environment,
        "features": FEATURES,
        "stats": {
            "totalUsers": len(users_repo.list_all()),
            "totalTests": ledger.count(),
            "uptime": round(time.monotonic() - _started_at, 3),
        },
    }


def main():
    """Run the API server. Exits with status 1 when Google credentials are missing."""
    import uvicorn

    settings = get_settings()
    require_credentials(settings)

    # Disable uvicorn access logs; application logs go through structured logging
    uvicorn.run(app, host="0.0.0.0", port=settings.port, access_log=False)


if __name__ == "__main__":
    main()
