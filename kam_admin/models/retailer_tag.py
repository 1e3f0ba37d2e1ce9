from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, JSON, func
from kam_admin.database import Base

class RetailerTag(Base):
    __tablename__ = "retailer_tags"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    user_name = Column(String, nullable=False)
    retailers = Column(JSON, nullable=False)  # list of 1-3 retailer names
    timestamp = Column(DateTime(timezone=True), nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (UniqueConstraint("user_id", name="uq_retailer_tags_user"),)
