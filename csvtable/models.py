from __future__ import annotations

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

Record = Dict[str, Optional[str]]


class NormalizedTable(BaseModel):
    headers: List[str] = Field(default_factory=list)
    rows: List[Record] = Field(default_factory=list)
    dropped_columns: List[str] = Field(default_factory=list)
    dropped_rows: int = 0


class ViewState(BaseModel):
    """What the page currently shows. Replaced wholesale, never mutated."""

    model_config = ConfigDict(frozen=True)

    headers: List[str] = Field(default_factory=list)
    rows: List[Record] = Field(default_factory=list)
    error: Optional[str] = None


class TableSummary(BaseModel):
    rows: int = 0
    columns: int = 0
    dropped_columns: List[str] = Field(default_factory=list, examples=[["Age"]])
    dropped_rows: int = 0


class NormalizeResponse(BaseModel):
    headers: List[str]
    rows: List[Record]
    summary: TableSummary


class HealthResponse(BaseModel):
    ok: bool = True
