from __future__ import annotations
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from .config import settings

# sqlite: ensure directory exists
import os
if settings.db_url.startswith("sqlite:///./data/"):
    os.makedirs("data", exist_ok=True)

engine = create_engine(settings.db_url, future=True, echo=False)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
