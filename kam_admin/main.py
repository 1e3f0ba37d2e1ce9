# kam_admin/main.py
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import exc as sa_exc
from kam_admin.config import settings
from kam_admin.database import engine, Base, AsyncSessionLocal
from kam_admin.core.exceptions import ImportValidationError
from kam_admin.models.user import User  # noqa: F401
from kam_admin.models.performance import PerformanceRecord  # noqa: F401
from kam_admin.models.call_record import CallRecord  # noqa: F401
from kam_admin.models.user_query import UserQuery  # noqa: F401
from kam_admin.models.retailer_tag import RetailerTag  # noqa: F401
from kam_admin.models.complaint_tag import ComplaintTag  # noqa: F401
from kam_admin.routers import (
    admin,
    analytics,
    auth,
    calls,
    complaint_tags,
    dashboard,
    performance,
    queries,
    retailer_tags,
)
from kam_admin.services.accounts import ensure_first_admin
from kam_admin.services.store import ComplaintTagStore

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


app = FastAPI(title="KAM Admin - Key Account Management", version="1.0")

# Include Routers
app.include_router(auth.router)
app.include_router(admin.router)
app.include_router(performance.router)
app.include_router(calls.router)
app.include_router(queries.router)
app.include_router(retailer_tags.router)
app.include_router(complaint_tags.router)
app.include_router(dashboard.router)
app.include_router(analytics.router)


@app.exception_handler(ImportValidationError)
async def import_validation_handler(request: Request, exc: ImportValidationError):
    logger.warning("Import rejected: %s", exc.message)
    return JSONResponse(status_code=422, content=exc.to_dict())


# Create DB Tables (for development; use Alembic in prod)
@app.on_event("startup")
async def startup_event():
    # ignore duplicate-object errors from previous partial runs
    async with engine.begin() as conn:
        try:
            await conn.run_sync(Base.metadata.create_all)
        except sa_exc.IntegrityError as e:
            msg = str(getattr(e, "orig", e))
            if "duplicate key value violates unique constraint" in msg or "already exists" in msg:
                logger.warning("Ignored duplicate DDL error during create_all: %s", msg)
            else:
                raise

    async with AsyncSessionLocal() as db:
        await ComplaintTagStore(db).seed_defaults()
        await ensure_first_admin(db)


@app.get("/")
def read_root():
    return {"message": "Welcome to KAM Admin Backend"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("kam_admin.main:app", host="0.0.0.0", port=8000, reload=True)
