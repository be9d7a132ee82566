"""History routes: stored calculation summaries."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from backend.database import get_db
from backend.models import CalculationType, HistoryCreate, HistoryEntry, HistoryListResponse
from backend.services.history import delete_entry, list_entries, save_entry

router = APIRouter()


@router.get("/history", response_model=HistoryListResponse)
async def get_history(
    calculation_type: Optional[CalculationType] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    """List stored calculations, newest first."""
    entries, total = list_entries(db, calculation_type=calculation_type, limit=limit, offset=offset)
    return HistoryListResponse(
        entries=[HistoryEntry.model_validate(entry) for entry in entries],
        total=total,
    )


@router.post("/history", response_model=HistoryEntry, status_code=201)
async def add_history(body: HistoryCreate, db: Session = Depends(get_db)):
    """Store a calculation summary, e.g. a divider the user picked."""
    entry = save_entry(db, body.calculation_type, body.input_parameters, body.result)
    return HistoryEntry.model_validate(entry)


@router.delete("/history/{entry_id}", status_code=204)
async def remove_history(entry_id: str, db: Session = Depends(get_db)):
    if not delete_entry(db, entry_id):
        raise HTTPException(status_code=404, detail="History entry not found")
