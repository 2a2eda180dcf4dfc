# captcha_backend/scripts/sanity.py
import sys, time
from captcha_backend.config import settings
from captcha_backend.policy import decide
from captcha_backend.recaptcha import RecaptchaClient, VerificationResult

if __name__ == "__main__":
    if len(sys.argv) not in (2, 3):
        print("usage: python -m captcha_backend.scripts.sanity TOKEN [ACTION]")
        sys.exit(1)

    token = sys.argv[1]
    action = sys.argv[2] if len(sys.argv) == 3 else None
    client = RecaptchaClient.from_settings(settings)

    t0 = time.perf_counter()
    outcome = client.verify(token)
    t1 = time.perf_counter()
    print(f"verify_ms={(t1 - t0)*1000:.2f}")
    print(f"outcome={outcome!r}")

    score = outcome.score if isinstance(outcome, VerificationResult) else None
    d = decide(outcome, action, settings.recaptcha_threshold)
    print(f"score={score} threshold={settings.recaptcha_threshold} allowed={d.allowed} reason={d.reason.value}")
    sys.exit(0 if d.allowed else 2)
