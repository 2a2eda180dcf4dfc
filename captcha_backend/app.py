from __future__ import annotations
import time
from collections import Counter
from datetime import date
from typing import Optional

from fastapi import Depends, FastAPI, Form, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.orm import Session

from .config import settings
from .db import SessionLocal, get_db
from .db_models import Base, VerificationAttempt
from .intake import Created, IntakeHandler
from .logger import log_middleware
from .recaptcha import RecaptchaClient
from .schemas import (
    EmployeeIn,
    EmployeeListResponse,
    EmployeeOut,
    FormConfigResponse,
    MetricsLiteResponse,
    RejectionResponse,
)
from .store import EmployeeStore

REJECTION_MESSAGE = "reCAPTCHA validation failed. You appear to be a bot. Please try again."

app = FastAPI(title="Employee reCAPTCHA API")

# DB init (SQLite)
Base.metadata.create_all(bind=SessionLocal.kw['bind'])

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.allowed_origins],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

# Logging
app.middleware("http")(log_middleware)

# Global state
RECAPTCHA = RecaptchaClient.from_settings(settings)

def get_recaptcha() -> RecaptchaClient:
    return RECAPTCHA

@app.get("/healthz")
def healthz():
    return {"ok": True}

@app.get("/", response_model=EmployeeListResponse)
@app.get("/all", response_model=EmployeeListResponse)
def list_employees(db: Session = Depends(get_db)):
    rows = EmployeeStore(db).find_all()
    return EmployeeListResponse(employees=[EmployeeOut.model_validate(r) for r in rows])

@app.get("/create/form", response_model=FormConfigResponse)
def create_form():
    # only public values; the secret key stays server-side
    return FormConfigResponse(site_key=settings.recaptcha_site_key, action=settings.recaptcha_action)

def _process_submission(
    expected_action: Optional[str],
    record: EmployeeIn,
    token: str,
    db: Session,
    client: RecaptchaClient,
):
    t0 = time.perf_counter()
    handler = IntakeHandler(
        client,
        EmployeeStore(db),
        threshold=settings.recaptcha_threshold,
        enabled=settings.recaptcha_enabled,
    )
    outcome = handler.submit(token, expected_action, record)
    latency_ms = (time.perf_counter() - t0) * 1000

    result = outcome.result
    db.add(VerificationAttempt(
        expected_action=expected_action,
        passed=1 if outcome.decision.allowed else 0,
        reason=outcome.decision.reason.value,
        score=result.score if result else None,
        action=result.action if result else None,
        hostname=result.hostname if result else None,
        employee_id=outcome.employee.id if isinstance(outcome, Created) else None,
        latency_ms=float(latency_ms),
    ))
    db.commit()

    if isinstance(outcome, Created):
        return RedirectResponse(url="/all", status_code=303)
    return JSONResponse(status_code=403, content=RejectionResponse(message=REJECTION_MESSAGE).model_dump())

@app.post("/create/process")
def create_process(
    name: str = Form(...),
    last_name: str = Form(..., alias="lastName"),
    date_of_birth: date = Form(..., alias="dateOfBirth"),
    token: str = Form("", alias="g-recaptcha-response"),
    db: Session = Depends(get_db),
    client: RecaptchaClient = Depends(get_recaptcha),
):
    record = EmployeeIn(name=name, last_name=last_name, date_of_birth=date_of_birth)
    return _process_submission(settings.recaptcha_action, record, token, db, client)

@app.post("/v2/create/process")
def create_process_v2(
    name: str = Form(...),
    last_name: str = Form(..., alias="lastName"),
    date_of_birth: date = Form(..., alias="dateOfBirth"),
    token: str = Form("", alias="g-recaptcha-response"),
    db: Session = Depends(get_db),
    client: RecaptchaClient = Depends(get_recaptcha),
):
    """Checkbox-widget flow: success and score only, no action check."""
    record = EmployeeIn(name=name, last_name=last_name, date_of_birth=date_of_birth)
    return _process_submission(None, record, token, db, client)

@app.get("/employees/{employee_id}", response_model=EmployeeOut)
def get_employee(employee_id: int, db: Session = Depends(get_db)):
    employee = EmployeeStore(db).find_by_id(employee_id)
    if employee is None:
        raise HTTPException(status_code=404, detail=f"Employee {employee_id} not found")
    return EmployeeOut.model_validate(employee)

@app.delete("/employees/{employee_id}", status_code=204)
def delete_employee(employee_id: int, db: Session = Depends(get_db)):
    if not EmployeeStore(db).delete_by_id(employee_id):
        raise HTTPException(status_code=404, detail=f"Employee {employee_id} not found")
    return Response(status_code=204)

@app.get("/metrics-lite", response_model=MetricsLiteResponse)
def metrics_lite(db: Session = Depends(get_db)):
    rows = db.query(VerificationAttempt.passed, VerificationAttempt.reason, VerificationAttempt.latency_ms).all()
    latencies = [r.latency_ms for r in rows if r.latency_ms is not None]
    avg = sum(latencies) / len(latencies) if latencies else 0.0
    return MetricsLiteResponse(
        attempts=len(rows),
        allowed=sum(r.passed for r in rows),
        by_reason=dict(Counter(r.reason for r in rows)),
        avg_latency_ms=round(avg, 2),
    )
