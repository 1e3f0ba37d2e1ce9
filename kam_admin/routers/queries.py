import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from kam_admin.database import get_db
from kam_admin.core.auth import get_current_user
from kam_admin.models.user import User
from kam_admin.schemas.query import (
    QueryStatsResponse,
    UserQueryCreate,
    UserQueryResponse,
    UserQueryStatusUpdate,
)
from kam_admin.services import analytics
from kam_admin.services.store import PerformanceStore, UserQueryStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/queries", tags=["queries"])


@router.post("", response_model=UserQueryResponse)
async def create_query(
    query_in: UserQueryCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if not query_in.complaint_tag.strip():
        raise HTTPException(400, "Please select a user and complaint tag")

    record = await PerformanceStore(db).get(query_in.user_id, current_user)
    if not record:
        raise HTTPException(404, "User not found or access denied")

    query = await UserQueryStore(db).add(
        user_id=record.user_id,
        user_name=record.name,
        complaint_tag=query_in.complaint_tag.strip(),
        comment=query_in.comment,
        created_by=current_user.id,
    )
    logger.info("Query %s opened for %s by %s", query.id, record.user_id, current_user.email)
    return query


@router.get("", response_model=List[UserQueryResponse])
async def list_queries(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await UserQueryStore(db).list(current_user)


@router.get("/stats", response_model=QueryStatsResponse)
async def get_query_stats(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return analytics.query_stats(await UserQueryStore(db).list(current_user))


@router.patch("/{query_id}/status", response_model=UserQueryResponse)
async def update_query_status(
    query_id: int,
    status_in: UserQueryStatusUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    store = UserQueryStore(db)
    query = await store.get(query_id, current_user)
    if not query:
        raise HTTPException(404, "Query not found or access denied")
    return await store.set_status(query, status_in.status)
