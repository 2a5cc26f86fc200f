"""SQLAlchemy ORM models"""

import uuid
from sqlalchemy import Column, Boolean, Float, DateTime, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class EvaluationLog(Base):
    """Audit record of one credit evaluation request"""

    __tablename__ = "evaluation_log"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    request_id = Column(Text, nullable=True)
    endpoint = Column(Text, nullable=False, index=True)
    method = Column(Text, nullable=False)
    ip = Column(Text, nullable=True)
    user_agent = Column(Text, nullable=True)
    success = Column(Boolean, nullable=False)
    decision = Column(Text, nullable=True)
    score = Column(Float, nullable=True)
    risk_tier = Column(Text, nullable=True)
    error = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)
