"""
Client for Google's reCAPTCHA ``siteverify`` endpoint.

``verify`` never raises: provider answers come back as
``VerificationResult``, unreadable bodies as ``NullResponse`` and
anything that stops the request from completing as ``TransportError``.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List, Optional, Union

import requests
from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError

from .config import GOOGLE_VERIFY_URL, Settings
from .logger import log_event

class VerificationResult(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    success: Optional[StrictBool] = None
    # NaN compares False against any threshold, so it must never get through
    score: Optional[float] = Field(default=None, ge=0.0, le=1.0, allow_inf_nan=False, strict=True)
    action: Optional[str] = None
    challenge_ts: Optional[str] = None
    hostname: Optional[str] = None
    error_codes: List[str] = Field(default_factory=list, alias="error-codes")

@dataclass(frozen=True)
class NullResponse:
    detail: str

@dataclass(frozen=True)
class TransportError:
    detail: str

VerifyOutcome = Union[VerificationResult, NullResponse, TransportError]

def parse_response(response: requests.Response) -> Union[VerificationResult, NullResponse]:
    # status code is not inspected; the body decides
    if not response.content or not response.content.strip():
        return NullResponse("empty body")
    try:
        payload = response.json()
    except ValueError:
        return NullResponse("body is not JSON")
    if not isinstance(payload, dict):
        return NullResponse(f"unexpected JSON {type(payload).__name__}")
    try:
        return VerificationResult.model_validate(payload)
    except ValidationError as e:
        return NullResponse(f"invalid fields: {e.error_count()}")

class RecaptchaClient:
    def __init__(
        self,
        secret_key: str,
        verify_url: str = GOOGLE_VERIFY_URL,
        timeout_s: float = 5.0,
        session: Optional[requests.Session] = None,
    ):
        self.secret_key = secret_key
        self.verify_url = verify_url
        self.timeout_s = timeout_s
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings) -> "RecaptchaClient":
        return cls(
            secret_key=settings.recaptcha_secret_key,
            verify_url=settings.recaptcha_verify_url,
            timeout_s=settings.recaptcha_timeout_s,
        )

    def verify(self, token: str) -> VerifyOutcome:
        # empty tokens go to the provider too; it answers with missing-input-response
        try:
            response = self.session.post(
                self.verify_url,
                data={"secret": self.secret_key, "response": token},
                timeout=self.timeout_s,
            )
            outcome = parse_response(response)
        except Exception as e:
            log_event("recaptcha_transport_error", logging.ERROR, error=type(e).__name__, detail=str(e))
            return TransportError(f"{type(e).__name__}: {e}")

        if isinstance(outcome, NullResponse):
            log_event("recaptcha_null_response", logging.ERROR, status=response.status_code, detail=outcome.detail)
            return outcome

        log_event(
            "recaptcha_result",
            success=outcome.success,
            score=outcome.score,
            action=outcome.action,
            hostname=outcome.hostname,
            error_codes=outcome.error_codes,
        )
        return outcome

    def get_score(self, token: str) -> Optional[float]:
        """Score of a successful verification, ``None`` for any other outcome."""
        outcome = self.verify(token)
        if isinstance(outcome, VerificationResult) and outcome.success is True:
            return outcome.score
        return None
