from datetime import date
from captcha_backend.intake import Created, IntakeHandler, Rejected
from captcha_backend.policy import Reason
from captcha_backend.recaptcha import NullResponse, TransportError, VerificationResult
from captcha_backend.schemas import EmployeeIn
from captcha_backend.store import EmployeeStore
from conftest import FakeRecaptcha

RECORD = EmployeeIn(name="Ada", last_name="Lovelace", date_of_birth=date(1815, 12, 10))

class CountingStore:
    def __init__(self, inner):
        self.inner = inner
        self.created = []

    def create(self, record):
        self.created.append(record)
        return self.inner.create(record)

def test_allowed_creates_exactly_once(db):
    store = CountingStore(EmployeeStore(db))
    fake = FakeRecaptcha(VerificationResult(success=True, score=0.9, action="submit"))
    out = IntakeHandler(fake, store, threshold=0.5).submit("tok", "submit", RECORD)
    assert isinstance(out, Created)
    assert store.created == [RECORD]
    assert out.employee.id is not None
    assert out.employee.last_name == "Lovelace"
    assert out.decision.reason is Reason.OK
    assert fake.tokens == ["tok"]
    assert EmployeeStore(db).find_by_id(out.employee.id).name == "Ada"

def test_low_score_rejected_without_touching_store(db):
    store = CountingStore(EmployeeStore(db))
    fake = FakeRecaptcha(VerificationResult(success=True, score=0.3, action="submit"))
    out = IntakeHandler(fake, store, threshold=0.5).submit("tok", None, RECORD)
    assert isinstance(out, Rejected)
    assert out.reason is Reason.LOW_SCORE
    assert out.result.score == 0.3
    assert store.created == []

def test_timeout_rejected_and_nothing_persisted(db):
    store = CountingStore(EmployeeStore(db))
    out = IntakeHandler(FakeRecaptcha(TransportError("Timeout: read timed out")), store, 0.5).submit("tok", "submit", RECORD)
    assert isinstance(out, Rejected)
    assert out.reason is Reason.TRANSPORT_ERROR
    assert out.result is None
    assert EmployeeStore(db).find_all() == []

def test_null_response_rejected(db):
    out = IntakeHandler(FakeRecaptcha(NullResponse("empty body")), EmployeeStore(db), 0.5).submit("tok", None, RECORD)
    assert isinstance(out, Rejected) and out.reason is Reason.NULL_RESPONSE

def test_action_mismatch_rejected(db):
    fake = FakeRecaptcha(VerificationResult(success=True, score=0.8, action="login"))
    out = IntakeHandler(fake, EmployeeStore(db), 0.5).submit("tok", "submit", RECORD)
    assert isinstance(out, Rejected) and out.reason is Reason.ACTION_MISMATCH

def test_verification_runs_once_per_submission(db):
    fake = FakeRecaptcha(VerificationResult(success=False))
    handler = IntakeHandler(fake, EmployeeStore(db), 0.5)
    handler.submit("a", None, RECORD)
    handler.submit("b", None, RECORD)
    assert fake.tokens == ["a", "b"]

def test_disabled_skips_provider(db):
    fake = FakeRecaptcha()
    out = IntakeHandler(fake, EmployeeStore(db), 0.5, enabled=False).submit("", "submit", RECORD)
    assert isinstance(out, Created)
    assert fake.tokens == []
