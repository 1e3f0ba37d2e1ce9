from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from kam_admin.database import Base

class ComplaintTag(Base):
    __tablename__ = "complaint_tags"

    id = Column(Integer, primary_key=True, index=True)
    tag_name = Column(String, unique=True, nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)  # NULL for seeded defaults
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
