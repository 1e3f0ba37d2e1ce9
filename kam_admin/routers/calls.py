import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from kam_admin.database import get_db
from kam_admin.core.auth import get_current_user
from kam_admin.models.user import User
from kam_admin.schemas.call_record import CallRecordCreate, CallRecordResponse
from kam_admin.services.store import CallRecordStore, PerformanceStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/calls", tags=["calls"])


@router.post("", response_model=CallRecordResponse)
async def log_call(
    call_in: CallRecordCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Record a call outcome; replaces the previous outcome for this user."""
    record = await PerformanceStore(db).get(call_in.user_id, current_user)
    if not record:
        raise HTTPException(404, "User not found or access denied")

    call = await CallRecordStore(db).upsert(
        user_id=call_in.user_id,
        status=call_in.status,
        comment=call_in.comment.strip(),
        complaint_tag=call_in.complaint_tag,
        created_by=current_user.id,
    )
    logger.info("Call for %s logged as '%s' by %s", call_in.user_id, call_in.status, current_user.email)
    return call


@router.get("", response_model=List[CallRecordResponse])
async def list_calls(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await CallRecordStore(db).list(current_user)
