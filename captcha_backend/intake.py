from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional, Union

from .db_models import Employee
from .logger import log_event
from .policy import ALLOW, Decision, Reason, decide
from .recaptcha import RecaptchaClient, VerificationResult
from .schemas import EmployeeIn
from .store import EmployeeStore

@dataclass(frozen=True)
class Created:
    employee: Employee
    decision: Decision
    result: Optional[VerificationResult] = None

@dataclass(frozen=True)
class Rejected:
    decision: Decision
    result: Optional[VerificationResult] = None

    @property
    def reason(self) -> Reason:
        return self.decision.reason

IntakeOutcome = Union[Created, Rejected]

class IntakeHandler:
    def __init__(self, client: RecaptchaClient, store: EmployeeStore, threshold: float, enabled: bool = True):
        self.client = client
        self.store = store
        self.threshold = threshold
        self.enabled = enabled

    def submit(self, token: str, expected_action: Optional[str], record: EmployeeIn) -> IntakeOutcome:
        """
        Verify the token, then create the record only if the decision allows it.
        Single attempt: a denied token is final for this submission.
        """
        result: Optional[VerificationResult] = None
        if not self.enabled:
            log_event("recaptcha_disabled", logging.WARNING, expected_action=expected_action)
            decision = ALLOW
        else:
            outcome = self.client.verify(token)
            decision = decide(outcome, expected_action, self.threshold)
            if isinstance(outcome, VerificationResult):
                result = outcome

        log_event(
            "intake_decision",
            logging.INFO if decision.allowed else logging.WARNING,
            allowed=decision.allowed,
            reason=decision.reason.value,
            expected_action=expected_action,
            score=result.score if result else None,
            threshold=self.threshold,
        )
        if not decision.allowed:
            return Rejected(decision, result)

        employee = self.store.create(record)
        return Created(employee, decision, result)
