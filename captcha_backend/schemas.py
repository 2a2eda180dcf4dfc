from __future__ import annotations
from datetime import date
from typing import Dict, List
from pydantic import BaseModel, ConfigDict

class EmployeeIn(BaseModel):
    name: str
    last_name: str
    date_of_birth: date

class EmployeeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str | None
    last_name: str | None
    date_of_birth: date

class EmployeeListResponse(BaseModel):
    employees: List[EmployeeOut]

class FormConfigResponse(BaseModel):
    site_key: str
    action: str

class RejectionResponse(BaseModel):
    message: str

class MetricsLiteResponse(BaseModel):
    attempts: int
    allowed: int
    by_reason: Dict[str, int]
    avg_latency_ms: float
