"""Calculation history storage."""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from backend.models import CalculationType
from backend.models_db import CalculationHistory

logger = logging.getLogger(__name__)


def save_entry(db: Session, calculation_type: CalculationType, input_parameters: str, result: str) -> CalculationHistory:
    """Persist one calculation summary and return the stored row."""
    entry = CalculationHistory(
        calculation_type=calculation_type.value,
        input_parameters=input_parameters,
        result=result,
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logger.info("Saved %s result to history (%s)", calculation_type.value, entry.id)
    return entry


def list_entries(
    db: Session,
    calculation_type: Optional[CalculationType] = None,
    limit: int = 50,
    offset: int = 0,
) -> Tuple[List[CalculationHistory], int]:
    """Newest entries first, with the total count before pagination."""
    query = db.query(CalculationHistory)
    if calculation_type is not None:
        query = query.filter(CalculationHistory.calculation_type == calculation_type.value)
    total = query.count()
    entries = (
        query.order_by(CalculationHistory.created_at.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return entries, total


def delete_entry(db: Session, entry_id: str) -> bool:
    entry = db.get(CalculationHistory, entry_id)
    if entry is None:
        return False
    db.delete(entry)
    db.commit()
    return True
