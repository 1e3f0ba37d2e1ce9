from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List
from kam_admin.database import get_db
from kam_admin.core.auth import get_current_admin
from kam_admin.models.user import User
from kam_admin.schemas.user import AccountCreate, UserResponse
from kam_admin.schemas.analytics import UserActivityResponse, UserCoverageStats
from kam_admin.schemas.performance import PerformanceRecordData
from kam_admin.schemas.call_record import CallRecordResponse
from kam_admin.schemas.query import UserQueryResponse
from kam_admin.schemas.tag import RetailerTagResponse
from kam_admin.services.accounts import AccountExists, create_account
from kam_admin.services.store import (
    CallRecordStore,
    PerformanceStore,
    RetailerTagStore,
    UserQueryStore,
)


router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/accounts", response_model=UserResponse)
async def admin_create_account(
    account_in: AccountCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    try:
        return await create_account(
            db,
            email=account_in.email,
            username=account_in.username,
            name=account_in.name,
            password=account_in.password,
            role=account_in.role,
            poc=account_in.poc,
            phone=account_in.phone,
            department=account_in.department,
            branch=account_in.branch,
        )
    except AccountExists as e:
        raise HTTPException(400, str(e))


@router.get("/accounts", response_model=List[UserResponse])
async def admin_list_accounts(
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    result = await db.execute(select(User).order_by(User.created_at.desc(), User.id.desc()))
    return result.scalars().all()


@router.get("/users/stats", response_model=UserCoverageStats)
async def admin_user_stats(
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    records = await PerformanceStore(db).list(admin)
    calls = await CallRecordStore(db).list(admin)
    queries = await UserQueryStore(db).list(admin)
    tags = await RetailerTagStore(db).list(admin)

    return UserCoverageStats(
        total_users=len(records),
        users_with_calls=len({c.user_id for c in calls}),
        users_with_queries=len({q.user_id for q in queries}),
        users_with_tags=len(tags),
    )


@router.get("/users/{user_id}/activity", response_model=UserActivityResponse)
async def admin_user_activity(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    record = await PerformanceStore(db).get(user_id, admin)
    if not record:
        raise HTTPException(404, "User not found")

    calls = await CallRecordStore(db).for_user(user_id)
    queries = await UserQueryStore(db).for_user(user_id)
    tags = await RetailerTagStore(db).for_user(user_id)

    return UserActivityResponse(
        record=PerformanceRecordData.model_validate(record),
        call_records=[CallRecordResponse.model_validate(c) for c in calls],
        user_queries=[UserQueryResponse.model_validate(q) for q in queries],
        retailer_tags=[RetailerTagResponse.model_validate(t) for t in tags],
        total_activities=len(calls) + len(queries) + len(tags),
    )
