from sqlalchemy import Column, Integer, String, Boolean, DateTime, func
from kam_admin.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    username = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    role = Column(String, nullable=False, default="employee")  # "admin" or "employee"
    poc = Column(String, nullable=True, index=True)  # owner name matched against PerformanceRecord.poc
    phone = Column(String, nullable=True)
    department = Column(String, nullable=True)
    branch = Column(String, nullable=True)
    hashed_password = Column(String, nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
