import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from kam_admin.database import get_db
from kam_admin.core.auth import get_current_admin, get_current_user
from kam_admin.models.user import User
from kam_admin.schemas.tag import ComplaintTagCreate, ComplaintTagResponse
from kam_admin.services.store import ComplaintTagStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/complaint-tags", tags=["complaint-tags"])


@router.get("", response_model=List[ComplaintTagResponse])
async def list_complaint_tags(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await ComplaintTagStore(db).list()


@router.post("", response_model=ComplaintTagResponse)
async def add_complaint_tag(
    tag_in: ComplaintTagCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    store = ComplaintTagStore(db)
    if await store.find_by_name(tag_in.tag_name):
        raise HTTPException(400, "Complaint tag already exists")
    tag = await store.add(tag_in.tag_name, admin.id)
    logger.info("Complaint tag '%s' added by %s", tag.tag_name, admin.email)
    return tag


@router.put("/{tag_id}", response_model=ComplaintTagResponse)
async def rename_complaint_tag(
    tag_id: int,
    tag_in: ComplaintTagCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    store = ComplaintTagStore(db)
    tag = await store.get(tag_id)
    if not tag:
        raise HTTPException(404, "Complaint tag not found")
    duplicate = await store.find_by_name(tag_in.tag_name)
    if duplicate and duplicate.id != tag.id:
        raise HTTPException(400, "Complaint tag already exists")
    return await store.rename(tag, tag_in.tag_name)


@router.delete("/{tag_id}")
async def delete_complaint_tag(
    tag_id: int,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    store = ComplaintTagStore(db)
    tag = await store.get(tag_id)
    if not tag:
        raise HTTPException(404, "Complaint tag not found")
    await store.delete(tag)
    logger.info("Complaint tag '%s' deleted by %s", tag.tag_name, admin.email)
    return {"message": "Complaint tag deleted"}
