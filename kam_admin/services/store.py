# kam_admin/services/store.py
"""Stores owning each collection. The AsyncSession passed in is the
persistence collaborator; every mutation commits before returning.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from kam_admin.models.call_record import CallRecord
from kam_admin.models.complaint_tag import ComplaintTag
from kam_admin.models.performance import PerformanceRecord
from kam_admin.models.retailer_tag import RetailerTag
from kam_admin.models.user import User
from kam_admin.models.user_query import UserQuery
from kam_admin.schemas.performance import PerformanceRecordData
from kam_admin.services.access import scope_by_user_id, scope_performance

logger = logging.getLogger(__name__)

DEFAULT_COMPLAINT_TAGS = (
    "Validation Delay",
    "Tracking Issue",
    "Retailer not Live",
    "Major cancellation : E Comm",
    "Major cancellation : Finance",
    "Better Rates on Competitors",
    "Miscellaneous",
    "Low Conversion on EK",
    "Affiliaters Issue",
    "Product Issue",
    "Amazon Disapproval",
    "Payment Related",
    "Zero Comission",
    "Other",
    "Paid Posts",
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PerformanceStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self, viewer: User) -> List[PerformanceRecord]:
        stmt = scope_performance(select(PerformanceRecord), viewer).order_by(PerformanceRecord.position)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get(self, user_id: str, viewer: User) -> Optional[PerformanceRecord]:
        stmt = scope_performance(
            select(PerformanceRecord).where(PerformanceRecord.user_id == user_id), viewer
        ).order_by(PerformanceRecord.position).limit(1)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def replace_all(self, records: Sequence[PerformanceRecordData]) -> int:
        """Swap the whole collection in one transaction; no merge with old rows."""
        try:
            await self.db.execute(delete(PerformanceRecord))
            self.db.add_all(
                PerformanceRecord(position=position, **record.model_dump())
                for position, record in enumerate(records)
            )
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        logger.info("Replaced performance records with %d rows", len(records))
        return len(records)


class CallRecordStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self, viewer: User) -> List[CallRecord]:
        stmt = scope_by_user_id(select(CallRecord), CallRecord.user_id, viewer)
        result = await self.db.execute(stmt.order_by(CallRecord.timestamp.desc()))
        return list(result.scalars().all())

    async def for_user(self, user_id: str) -> List[CallRecord]:
        result = await self.db.execute(select(CallRecord).where(CallRecord.user_id == user_id))
        return list(result.scalars().all())

    async def upsert(self, user_id: str, status: str, comment: str,
                     complaint_tag: Optional[str], created_by: int) -> CallRecord:
        """The latest call outcome replaces any earlier one for the same user."""
        result = await self.db.execute(select(CallRecord).where(CallRecord.user_id == user_id))
        record = result.scalar_one_or_none()
        if record is None:
            record = CallRecord(user_id=user_id)
        record.status = status
        record.comment = comment
        record.complaint_tag = complaint_tag or None
        record.timestamp = utcnow()
        record.created_by = created_by
        self.db.add(record)
        await self.db.commit()
        await self.db.refresh(record)
        return record


class UserQueryStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self, viewer: User) -> List[UserQuery]:
        stmt = scope_by_user_id(select(UserQuery), UserQuery.user_id, viewer)
        result = await self.db.execute(stmt.order_by(UserQuery.timestamp.desc(), UserQuery.id.desc()))
        return list(result.scalars().all())

    async def for_user(self, user_id: str) -> List[UserQuery]:
        result = await self.db.execute(
            select(UserQuery).where(UserQuery.user_id == user_id).order_by(UserQuery.id.desc())
        )
        return list(result.scalars().all())

    async def get(self, query_id: int, viewer: User) -> Optional[UserQuery]:
        stmt = scope_by_user_id(select(UserQuery).where(UserQuery.id == query_id), UserQuery.user_id, viewer)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def add(self, user_id: str, user_name: str, complaint_tag: str,
                  comment: str, created_by: int) -> UserQuery:
        query = UserQuery(
            user_id=user_id,
            user_name=user_name,
            complaint_tag=complaint_tag,
            comment=comment.strip(),
            status="open",
            timestamp=utcnow(),
            created_by=created_by,
        )
        self.db.add(query)
        await self.db.commit()
        await self.db.refresh(query)
        return query

    async def set_status(self, query: UserQuery, status: str) -> UserQuery:
        query.status = status
        self.db.add(query)
        await self.db.commit()
        await self.db.refresh(query)
        return query


class RetailerTagStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self, viewer: User) -> List[RetailerTag]:
        stmt = scope_by_user_id(select(RetailerTag), RetailerTag.user_id, viewer)
        result = await self.db.execute(stmt.order_by(RetailerTag.timestamp.desc()))
        return list(result.scalars().all())

    async def for_user(self, user_id: str) -> List[RetailerTag]:
        result = await self.db.execute(select(RetailerTag).where(RetailerTag.user_id == user_id))
        return list(result.scalars().all())

    async def upsert(self, user_id: str, user_name: str, retailers: List[str], created_by: int) -> RetailerTag:
        result = await self.db.execute(select(RetailerTag).where(RetailerTag.user_id == user_id))
        tag = result.scalar_one_or_none()
        if tag is None:
            tag = RetailerTag(user_id=user_id)
        tag.user_name = user_name
        tag.retailers = list(retailers)
        tag.timestamp = utcnow()
        tag.created_by = created_by
        self.db.add(tag)
        await self.db.commit()
        await self.db.refresh(tag)
        return tag


class ComplaintTagStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self) -> List[ComplaintTag]:
        result = await self.db.execute(select(ComplaintTag).order_by(ComplaintTag.id))
        return list(result.scalars().all())

    async def get(self, tag_id: int) -> Optional[ComplaintTag]:
        result = await self.db.execute(select(ComplaintTag).where(ComplaintTag.id == tag_id))
        return result.scalar_one_or_none()

    async def find_by_name(self, tag_name: str) -> Optional[ComplaintTag]:
        result = await self.db.execute(select(ComplaintTag).where(ComplaintTag.tag_name == tag_name))
        return result.scalar_one_or_none()

    async def add(self, tag_name: str, created_by: Optional[int]) -> ComplaintTag:
        tag = ComplaintTag(tag_name=tag_name, created_by=created_by)
        self.db.add(tag)
        await self.db.commit()
        await self.db.refresh(tag)
        return tag

    async def rename(self, tag: ComplaintTag, tag_name: str) -> ComplaintTag:
        # calls and queries keep the old name; tags are plain strings there
        tag.tag_name = tag_name
        self.db.add(tag)
        await self.db.commit()
        await self.db.refresh(tag)
        return tag

    async def delete(self, tag: ComplaintTag) -> None:
        await self.db.delete(tag)
        await self.db.commit()

    async def seed_defaults(self) -> int:
        existing = await self.list()
        if existing:
            return 0
        self.db.add_all(ComplaintTag(tag_name=name) for name in DEFAULT_COMPLAINT_TAGS)
        await self.db.commit()
        logger.info("Seeded %d default complaint tags", len(DEFAULT_COMPLAINT_TAGS))
        return len(DEFAULT_COMPLAINT_TAGS)
