from __future__ import annotations
from datetime import datetime, timezone
from sqlalchemy import Column, Date, DateTime, Float, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()

class Employee(Base):
    __tablename__ = "employee"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255))
    last_name = Column(String(255))
    date_of_birth = Column(Date, nullable=False)

class VerificationAttempt(Base):
    __tablename__ = "verification_attempts"
    id = Column(Integer, primary_key=True)
    ts = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    expected_action = Column(String(64)) # null for v2 checks
    passed = Column(Integer, nullable=False) # 0/1
    reason = Column(String(32), nullable=False)
    score = Column(Float)
    action = Column(String(64))
    hostname = Column(String(255))
    employee_id = Column(Integer)
    latency_ms = Column(Float)
