"""Engine and session factory for the evaluation audit log"""

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from credit_gateway.config import settings

engine = create_engine(settings.database_url, pool_pre_ping=True)

# Shared by request-scoped readers (get_db) and the background audit writer
SessionLocal = sessionmaker(autoflush=False, bind=engine)


def get_db() -> Session:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
