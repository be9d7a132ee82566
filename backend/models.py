"""Pydantic models for DividerForge API requests and responses."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from divider_engine.components import ResistorSeries


# --- Enums ---

class CalculationType(str, Enum):
    VOLTAGE_DIVIDER = "voltage_divider"
    OHM_LAW = "ohm_law"


class OhmQuantity(str, Enum):
    VOLTAGE = "voltage"
    CURRENT = "current"
    RESISTANCE = "resistance"


# --- Divider search ---

class DividerSearchRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    v_in: float = Field(..., gt=0, description="Input voltage (V)")
    v_out_required: float = Field(..., gt=0, description="Required output voltage (V)")
    tolerance_percent: float = Field(1.0, gt=0, le=10, description="Maximum output error (%)")
    series: ResistorSeries = ResistorSeries.E24
    min_resistance: float = Field(100.0, gt=0, description="Smallest resistor value (Ohms)")
    max_resistance: float = Field(1_000_000.0, gt=0, description="Largest resistor value (Ohms)")
    max_results: int = Field(50, ge=1, le=1000)
    save_best: bool = Field(False, description="Store the best result in calculation history")

    @field_validator("series", mode="before")
    @classmethod
    def normalize_series(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v


class DividerNetworkOut(BaseModel):
    upper_arm: list[float]
    lower_arm: list[float]
    upper_parallel: bool
    lower_parallel: bool
    upper_resistance: float
    lower_resistance: float
    v_in: float
    v_out_required: float
    v_out_actual: float
    error_percent: float
    total_resistance: float
    current: float
    power_dissipation: float
    resistor_count: int
    topology: str
    summary: str


class DividerSearchResponse(BaseModel):
    results: list[DividerNetworkOut]
    count: int
    history_id: Optional[str] = None


class SeriesInfo(BaseModel):
    name: ResistorSeries
    values_per_decade: int
    base_values: list[float]


class SeriesListResponse(BaseModel):
    series: list[SeriesInfo]


# --- Ohm's law ---

class OhmRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    solve_for: OhmQuantity
    voltage: Optional[float] = Field(None, description="Volts")
    current: Optional[float] = Field(None, description="Amperes")
    resistance: Optional[float] = Field(None, ge=0, description="Ohms")
    save: bool = False


class OhmResponse(BaseModel):
    voltage: float
    current: float
    resistance: float
    power: float
    solved_for: OhmQuantity
    input_summary: str
    result_summary: str
    history_id: Optional[str] = None


# --- History ---

class HistoryCreate(BaseModel):
    calculation_type: CalculationType
    input_parameters: str = Field(..., max_length=2000)
    result: str = Field(..., min_length=1, max_length=2000)


class HistoryEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    calculation_type: CalculationType
    input_parameters: str
    result: str
    created_at: datetime


class HistoryListResponse(BaseModel):
    entries: list[HistoryEntry]
    total: int
