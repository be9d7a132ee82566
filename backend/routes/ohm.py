"""Ohm's law calculator route."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from backend.database import get_db
from backend.models import CalculationType, OhmQuantity, OhmRequest, OhmResponse
from backend.services.history import save_entry
from divider_engine.errors import InvalidParameterError
from divider_engine.ohm import calculate_current, calculate_resistance, calculate_voltage

router = APIRouter()

# Quantity to solve for -> (solver, the two inputs it needs)
_SOLVERS = {
    OhmQuantity.VOLTAGE: (calculate_voltage, ("current", "resistance")),
    OhmQuantity.CURRENT: (calculate_current, ("voltage", "resistance")),
    OhmQuantity.RESISTANCE: (calculate_resistance, ("voltage", "current")),
}


@router.post("/ohm/calculate", response_model=OhmResponse)
async def calculate(request: OhmRequest, db: Session = Depends(get_db)):
    """Solve V = I·R for one quantity from the other two."""
    solver, inputs = _SOLVERS[request.solve_for]
    values = {name: getattr(request, name) for name in inputs}
    missing = [name for name, value in values.items() if value is None]
    if missing:
        raise HTTPException(
            status_code=422,
            detail=f"Solving for {request.solve_for.value} requires: {', '.join(missing)}",
        )

    try:
        result = solver(**values)
    except InvalidParameterError as e:
        raise HTTPException(status_code=422, detail=str(e))

    history_id = None
    if request.save:
        entry = save_entry(db, CalculationType.OHM_LAW, result.input_summary, result.result_summary)
        history_id = entry.id

    return OhmResponse(
        voltage=result.voltage,
        current=result.current,
        resistance=result.resistance,
        power=result.power,
        solved_for=result.solved_for,
        input_summary=result.input_summary,
        result_summary=result.result_summary,
        history_id=history_id,
    )
