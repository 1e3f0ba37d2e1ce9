# kam_admin/models/performance.py
from sqlalchemy import Column, Integer, String, Float, DateTime, func
from kam_admin.database import Base

class PerformanceRecord(Base):
    __tablename__ = "performance_records"

    id = Column(Integer, primary_key=True, index=True)
    position = Column(Integer, nullable=False)  # row order of the import
    user_id = Column(String, nullable=False, index=True)
    date = Column(String, nullable=False)  # dd/mm/yyyy, as imported
    name = Column(String, nullable=False)
    poc = Column(String, nullable=False, index=True)

    potential = Column(Float, nullable=False)
    last_30_days = Column(Float, nullable=False)
    pro_rated_ach = Column(Float, nullable=False)
    short_fall = Column(Float, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
