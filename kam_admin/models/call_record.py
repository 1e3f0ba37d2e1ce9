from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint, func
from kam_admin.database import Base

class CallRecord(Base):
    __tablename__ = "call_records"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)  # PerformanceRecord.user_id, not a foreign key
    status = Column(String, nullable=False)  # call connected, call not connected, switched off, call later
    comment = Column(Text, nullable=False, default="")
    complaint_tag = Column(String, nullable=True)
    timestamp = Column(DateTime(timezone=True), nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (UniqueConstraint("user_id", name="uq_call_records_user"),)
