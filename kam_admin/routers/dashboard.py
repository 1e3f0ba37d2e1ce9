from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from kam_admin.config import settings
from kam_admin.database import get_db
from kam_admin.core.auth import get_current_user
from kam_admin.models.user import User
from kam_admin.schemas.analytics import DashboardSummary
from kam_admin.services import analytics
from kam_admin.services.store import (
    CallRecordStore,
    PerformanceStore,
    RetailerTagStore,
    UserQueryStore,
)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardSummary)
async def get_dashboard(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    # Underperforming users are listed via GET /performance?performance=underperforming
    records = await PerformanceStore(db).list(current_user)
    calls = await CallRecordStore(db).list(current_user)
    queries = await UserQueryStore(db).list(current_user)
    tags = await RetailerTagStore(db).list(current_user)

    return analytics.dashboard_summary(
        records, calls, queries, tags, settings.UNDERPERFORMING_THRESHOLD
    )
