import logging

from fastapi import FastAPI, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from sqlalchemy import text

from sugarreset.db.base import get_db
from sugarreset.core.config import settings
from sugarreset.routers import plans as plans_router
from sugarreset.routers import users as users_router
from sugarreset.routers import check_ins as check_ins_router
from sugarreset.routers import community as community_router
from sugarreset.core.errors import (
    SugarResetException,
    sugarreset_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("sugarreset")

app = FastAPI(
    title="SugarReset API",
    description=(
        "**Sugar-reduction plans, daily check-ins and streaks**\n\n"
        "Tracks where each user is in their cold-turkey or gradual plan, "
        "records one check-in per day, keeps current/longest streaks and "
        "publishes a community summary.\n\n"
        "All error responses follow the `{code, message, details}` envelope."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Exception handlers (most specific first) ---
app.add_exception_handler(SugarResetException, sugarreset_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Routers ---
app.include_router(plans_router.router)
app.include_router(users_router.router)
app.include_router(check_ins_router.router)
app.include_router(community_router.router)

logger.info("SugarReset API starting (env=%s)", settings.APP_ENV)


@app.get("/health", tags=["health"], summary="Liveness and database check")
def health(db: Session = Depends(get_db)):
    """200 with `db: ok` when a trivial query succeeds, 503 otherwise."""
    try:
        db.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Health check could not reach the database")
        return JSONResponse(
            status_code=503,
            content={"status": "error", "db": "unreachable"},
        )
    return {"status": "ok", "db": "ok", "env": settings.APP_ENV}
