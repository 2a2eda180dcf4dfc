from __future__ import annotations
import os
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

GOOGLE_VERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"

class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    app_host: str = os.getenv("APP_HOST", "0.0.0.0")
    app_port: int = int(os.getenv("APP_PORT", "8080"))
    db_url: str = os.getenv("DB_URL", "sqlite:///./data/employees.db")
    allowed_origins: str = os.getenv("ALLOWED_ORIGINS", "http://localhost:5173")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    recaptcha_secret_key: str = os.getenv("RECAPTCHA_SECRET_KEY", "")
    recaptcha_site_key: str = os.getenv("RECAPTCHA_SITE_KEY", "")
    recaptcha_threshold: float = float(os.getenv("RECAPTCHA_THRESHOLD", "0.5"))
    recaptcha_enabled: bool = os.getenv("RECAPTCHA_ENABLED", "true").lower() == "true"
    recaptcha_verify_url: str = os.getenv("RECAPTCHA_VERIFY_URL", GOOGLE_VERIFY_URL)
    recaptcha_timeout_s: float = float(os.getenv("RECAPTCHA_TIMEOUT_S", "5.0"))
    recaptcha_action: str = os.getenv("RECAPTCHA_ACTION", "submit")

    @field_validator("recaptcha_threshold")
    @classmethod
    def _threshold_in_unit_range(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("recaptcha_threshold must be within [0, 1]")
        return v

    @field_validator("recaptcha_timeout_s")
    @classmethod
    def _timeout_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("recaptcha_timeout_s must be positive")
        return v

    @model_validator(mode="after")
    def _secret_when_enabled(self) -> "Settings":
        if self.recaptcha_enabled and not self.recaptcha_secret_key:
            raise ValueError("RECAPTCHA_SECRET_KEY is required while RECAPTCHA_ENABLED=true")
        return self

settings = Settings()
