from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from kam_admin.database import get_db
from kam_admin.core.auth import get_current_user
from kam_admin.models.user import User
from kam_admin.schemas.analytics import AnalyticsResponse
from kam_admin.services import analytics
from kam_admin.services.store import (
    CallRecordStore,
    PerformanceStore,
    RetailerTagStore,
    UserQueryStore,
)

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("", response_model=AnalyticsResponse)
async def get_analytics(
    complaints: Optional[List[str]] = Query(None),
    search: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    records = await PerformanceStore(db).list(current_user)
    calls = await CallRecordStore(db).list(current_user)
    queries = await UserQueryStore(db).list(current_user)
    tags = await RetailerTagStore(db).list(current_user)

    complaint_tags = analytics.complaint_tag_counts(calls, queries)

    return AnalyticsResponse(
        total_complaints=sum(item.count for item in complaint_tags),
        total_queries=len(queries),
        open_queries=sum(1 for q in queries if q.status == "open"),
        complaint_tags=complaint_tags,
        retailer_counts=analytics.retailer_counts(tags),
        users_tagged=len(tags),
        retailer_performance=analytics.retailer_performance(tags, records),
        timeline=analytics.complaint_timeline(calls, queries),
        affected_users=analytics.affected_users(records, calls, queries, complaints, search),
    )
