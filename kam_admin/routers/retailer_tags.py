import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from kam_admin.config import settings
from kam_admin.database import get_db
from kam_admin.core.auth import get_current_user
from kam_admin.models.user import User
from kam_admin.schemas.tag import RetailerTagResponse, RetailerTagUpdate, RetailerTaggingStats
from kam_admin.services import analytics
from kam_admin.services.store import PerformanceStore, RetailerTagStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/retailer-tags", tags=["retailer-tags"])

RETAILER_OPTIONS = [
    "Myntra",
    "Nykaa",
    "Flipkart",
    "Amazon",
    "Truemeds",
    "Dot&Key",
    "Ajio",
    "OctaFX",
    "Scapia",
    "Rio",
    "FirstCry",
    "Cadbury",
    "Reliance Digital",
    "Other",
]


@router.get("/options", response_model=List[str])
async def list_retailer_options(current_user: User = Depends(get_current_user)):
    return RETAILER_OPTIONS


@router.put("/{user_id}", response_model=RetailerTagResponse)
async def save_retailer_tags(
    user_id: str,
    tag_in: RetailerTagUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if len(tag_in.retailers) > settings.MAX_RETAILERS_PER_USER:
        raise HTTPException(
            400, f"A user can be tagged with at most {settings.MAX_RETAILERS_PER_USER} retailers"
        )

    record = await PerformanceStore(db).get(user_id, current_user)
    if not record:
        raise HTTPException(404, "User not found or access denied")

    tag = await RetailerTagStore(db).upsert(
        user_id=record.user_id,
        user_name=record.name,
        retailers=tag_in.retailers,
        created_by=current_user.id,
    )
    logger.info("Retailer tags for %s set to %s", user_id, ", ".join(tag_in.retailers))
    return tag


@router.get("", response_model=List[RetailerTagResponse])
async def list_retailer_tags(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await RetailerTagStore(db).list(current_user)


@router.get("/stats", response_model=RetailerTaggingStats)
async def get_tagging_stats(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    records = await PerformanceStore(db).list(current_user)
    tags = await RetailerTagStore(db).list(current_user)
    return analytics.tagging_stats(records, tags)
