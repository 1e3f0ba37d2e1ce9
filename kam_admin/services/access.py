# kam_admin/services/access.py
"""Role and POC scoping applied to every read.

Admins see everything. Employees see the performance records whose POC is
their own, and only the calls, queries and retailer tags of those users.
"""
from sqlalchemy import select, false

from kam_admin.models.performance import PerformanceRecord
from kam_admin.models.user import User

ADMIN = "admin"
EMPLOYEE = "employee"
ROLES = (ADMIN, EMPLOYEE)


def is_admin(user: User) -> bool:
    return user.role == ADMIN


def scope_performance(stmt, viewer: User):
    if is_admin(viewer):
        return stmt
    if not viewer.poc:
        return stmt.where(false())
    return stmt.where(PerformanceRecord.poc == viewer.poc)


def visible_user_ids(viewer: User):
    """Subquery of PerformanceRecord.user_id values the viewer may see."""
    return scope_performance(select(PerformanceRecord.user_id), viewer)


def scope_by_user_id(stmt, column, viewer: User):
    if is_admin(viewer):
        return stmt
    return stmt.where(column.in_(visible_user_ids(viewer)))
