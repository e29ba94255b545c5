# app/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI

from app.core.config import get_settings
from app.database import create_db_and_tables

# Import models so SQLModel metadata is populated before create_all()
from app.models import profile as _profile_models  # noqa: F401
from app.models import workspace as _workspace_models  # noqa: F401
from app.models import holiday as _holiday_models  # noqa: F401


# Routers
from app.routers.profiles import router as profiles_router
from app.routers.holidays import router as holidays_router
from app.routers.delete_user import router as delete_user_router

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Verify DB connectivity and create tables.

    Shutdown:
      - No special cleanup needed for sync engine.
    """
    logger.info("🔄 Startup: Connecting to Supabase Postgres...")
    try:
        create_db_and_tables()
        logger.info("✅ Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"❌ Startup: DB connection FAILED: {e}")
        raise
    yield


app = FastAPI(
    title=settings.PROJECT_NAME or "Staff Workspace API",
    version="0.1.0",
    lifespan=lifespan,
)


# --- CORS configuration ---
# Any origin may call the API; auth is carried in the Authorization header,
# never in cookies, so credentials are not allowed.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)

# Versioned API prefix, e.g. /api/v1
app.include_router(profiles_router, prefix=settings.API_V1_STR)
app.include_router(holidays_router, prefix=settings.API_V1_STR)

# Edge-function style endpoints, e.g. /functions/v1/delete-user
app.include_router(delete_user_router, prefix=settings.FUNCTIONS_STR)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "staff-workspace-backend"}
