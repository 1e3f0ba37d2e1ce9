# kam_admin/services/accounts.py
import logging
from typing import Optional
from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession
from kam_admin.config import settings
from kam_admin.models.user import User
from kam_admin.services.access import ADMIN
from kam_admin.utils.password import hash_password

logger = logging.getLogger(__name__)


class AccountExists(Exception):
    pass


async def create_account(
    db: AsyncSession,
    email: str,
    username: str,
    name: str,
    password: str,
    role: str = "employee",
    poc: Optional[str] = None,
    phone: Optional[str] = None,
    department: Optional[str] = None,
    branch: Optional[str] = None,
) -> User:
    result = await db.execute(
        select(User).where(or_(User.email == email, User.username == username))
    )
    if result.scalars().first():
        raise AccountExists("Email or username already registered")

    user = User(
        email=email,
        username=username,
        name=name,
        role=role,
        poc=poc or name,
        phone=phone,
        department=department,
        branch=branch,
        hashed_password=hash_password(password),
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    logger.info("Created %s account %s (poc=%s)", role, email, user.poc)
    return user


async def ensure_first_admin(db: AsyncSession) -> Optional[User]:
    """Create the bootstrap admin from settings if configured and missing."""
    if not settings.FIRST_ADMIN_EMAIL or not settings.FIRST_ADMIN_PASSWORD:
        return None
    result = await db.execute(select(User).where(User.email == settings.FIRST_ADMIN_EMAIL))
    if result.scalar_one_or_none():
        return None
    return await create_account(
        db,
        email=settings.FIRST_ADMIN_EMAIL,
        username=settings.FIRST_ADMIN_EMAIL.split("@")[0],
        name=settings.FIRST_ADMIN_NAME,
        password=settings.FIRST_ADMIN_PASSWORD,
        role=ADMIN,
    )
