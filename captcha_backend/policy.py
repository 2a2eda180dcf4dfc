from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .recaptcha import NullResponse, TransportError, VerifyOutcome

class Reason(str, Enum):
    OK = "ok"
    REMOTE_FAILURE = "remote-failure"
    NULL_RESPONSE = "null-response"
    LOW_SCORE = "low-score"
    ACTION_MISMATCH = "action-mismatch"
    TRANSPORT_ERROR = "transport-error"

@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Reason

    @classmethod
    def deny(cls, reason: Reason) -> "Decision":
        return cls(allowed=False, reason=reason)

ALLOW = Decision(allowed=True, reason=Reason.OK)

def decide(outcome: VerifyOutcome, expected_action: Optional[str] = None, threshold: float = 0.5) -> Decision:
    """
    Ordered checks; the first one that fails names the reason.
    Pass expected_action=None for the v2 style boolean check (action ignored).
    A score equal to the threshold passes.
    """
    if isinstance(outcome, TransportError):
        return Decision.deny(Reason.TRANSPORT_ERROR)
    if isinstance(outcome, NullResponse):
        return Decision.deny(Reason.NULL_RESPONSE)
    if outcome.success is not True:
        return Decision.deny(Reason.REMOTE_FAILURE)
    # written as "not >=" so a NaN score also lands here
    if outcome.score is None or not outcome.score >= threshold:
        return Decision.deny(Reason.LOW_SCORE)
    if expected_action is not None and outcome.action != expected_action:
        return Decision.deny(Reason.ACTION_MISMATCH)
    return ALLOW
