from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from kam_admin.database import Base

class UserQuery(Base):
    __tablename__ = "user_queries"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    user_name = Column(String, nullable=False)
    complaint_tag = Column(String, nullable=False)
    comment = Column(Text, nullable=False, default="")
    status = Column(String, nullable=False, default="open")  # open, in-progress, resolved
    timestamp = Column(DateTime(timezone=True), nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
