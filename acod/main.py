# acod/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from acod.core.config import get_settings
from acod.database import create_db_and_tables

# Import models so SQLModel metadata is populated before create_all()
from acod.models import profile as _profile_models  # noqa: F401
from acod.models import content as _content_models  # noqa: F401


# Routers
from acod.routers.profiles import router as profiles_router
from acod.routers.users import router as users_router
from acod.routers.contents import router as contents_router

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: create profiles / contents / content_rejections if missing.
    A store that cannot be reached aborts startup.
    """
    logger.info("🔄 Startup: preparing approval tables...")
    try:
        create_db_and_tables()
        logger.info("✅ Startup: approval tables ready (tz=%s).", settings.LOCAL_TIMEZONE)
    except SQLAlchemyError as e:
        logger.error(f"❌ Startup: store unavailable: {e}")
        raise
    yield


app = FastAPI(
    title=settings.PROJECT_NAME or "Sistema de Aprovação Acod",
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    """
    Backing store failures are reported as-is; nothing is retried.
    """
    logger.error(f"Store error on {request.method} {request.url.path}: {exc}")
    detail = str(getattr(exc, "orig", None) or exc)
    return JSONResponse(status_code=500, content={"detail": detail})


# Versioned API prefix, e.g. /api/v1
app.include_router(profiles_router, prefix=settings.API_V1_STR)
app.include_router(users_router, prefix=settings.API_V1_STR)
app.include_router(contents_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "acod-approvals"}
