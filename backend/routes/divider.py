"""Divider routes: resistor series and divider combination search."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from backend.config import MAX_RESULTS_LIMIT
from backend.database import get_db
from backend.models import (
    CalculationType,
    DividerNetworkOut,
    DividerSearchRequest,
    DividerSearchResponse,
    SeriesInfo,
    SeriesListResponse,
)
from backend.services.history import save_entry
from divider_engine.components import E_SERIES, ResistorSeries
from divider_engine.errors import InvalidParameterError
from divider_engine.search import search_dividers

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/divider/series", response_model=SeriesListResponse)
async def list_series():
    """List the supported E-series and their base values."""
    return SeriesListResponse(
        series=[
            SeriesInfo(name=series, values_per_decade=len(E_SERIES[series]), base_values=E_SERIES[series])
            for series in ResistorSeries
        ]
    )


@router.post("/divider/search", response_model=DividerSearchResponse)
async def search_divider(request: DividerSearchRequest, db: Session = Depends(get_db)):
    """Find resistor dividers for a target output voltage, best first."""
    max_results = min(request.max_results, MAX_RESULTS_LIMIT)
    try:
        # CPU-bound; keep it off the event loop
        networks = await run_in_threadpool(
            search_dividers,
            request.v_in,
            request.v_out_required,
            request.tolerance_percent,
            request.series,
            request.min_resistance,
            request.max_resistance,
            max_results,
        )
    except InvalidParameterError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception:
        logger.error("Divider search failed", exc_info=True)
        raise HTTPException(status_code=500, detail="Divider search failed. Please try again.")

    history_id = None
    if request.save_best and networks:
        best = networks[0]
        entry = save_entry(
            db,
            CalculationType.VOLTAGE_DIVIDER,
            f"Vin={request.v_in:.2f} V, Vout_required={request.v_out_required:.4f} V",
            best.summary(),
        )
        history_id = entry.id

    return DividerSearchResponse(
        results=[DividerNetworkOut(**network.to_dict()) for network in networks],
        count=len(networks),
        history_id=history_id,
    )
