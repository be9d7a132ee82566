"""SQLAlchemy ORM models."""
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, Text, Index
from backend.database import Base

class CalculationHistory(Base):
    __tablename__ = "calculation_history"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    calculation_type = Column(String, nullable=False)
    input_parameters = Column(Text, nullable=False, default="")
    result = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_calculation_history_created_at", "created_at"),
    )
