import logging
from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Annotated, List
from kam_admin.config import settings
from kam_admin.database import get_db
from kam_admin.core.auth import get_current_admin, get_current_user
from kam_admin.models.user import User
from kam_admin.schemas.performance import (
    ImportPreviewResponse,
    ImportResultResponse,
    PerformanceTableFilter,
    PerformanceTableResponse,
)
from kam_admin.services import analytics
from kam_admin.services.ingestion import parse_upload
from kam_admin.services.store import PerformanceStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/performance", tags=["performance"])


async def _read_upload(file: UploadFile) -> bytes:
    content = await file.read()
    if len(content) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(413, "Uploaded file is too large")
    return content


@router.post("/import/preview", response_model=ImportPreviewResponse)
async def preview_import(
    file: UploadFile = File(...),
    admin: User = Depends(get_current_admin)
):
    """Validate an upload and return the parsed records without saving them."""
    content = await _read_upload(file)
    # whole batch parses off the event loop; validation errors abort it
    records = await run_in_threadpool(parse_upload, content, file.filename)
    return ImportPreviewResponse(total_rows=len(records), records=records)


@router.post("/import", response_model=ImportResultResponse)
async def confirm_import(
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    """Parse the upload and replace every stored performance record with it."""
    content = await _read_upload(file)
    records = await run_in_threadpool(parse_upload, content, file.filename)
    imported = await PerformanceStore(db).replace_all(records)
    logger.info("Admin %s imported %d records from %s", admin.email, imported, file.filename)
    return ImportResultResponse(imported=imported, message="Data imported successfully!")


@router.get("", response_model=PerformanceTableResponse)
async def list_performance(
    filters: Annotated[PerformanceTableFilter, Query()],
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    records = await PerformanceStore(db).list(current_user)
    rows = analytics.filter_performance_table(records, filters, settings.UNDERPERFORMING_THRESHOLD)

    return PerformanceTableResponse(
        stats=analytics.performance_table_stats(rows, settings.UNDERPERFORMING_THRESHOLD),
        pocs=analytics.distinct_pocs(records),
        records=rows,
    )


@router.get("/pocs", response_model=List[str])
async def list_pocs(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    records = await PerformanceStore(db).list(current_user)
    return analytics.distinct_pocs(records)
