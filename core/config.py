"""
Runtime configuration.

Values come from the environment (and `.env` for local runs). Build one
`Config` at startup and hand it to the components that need it.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_FROM = "noreply@jobtracker.local"


def _env_int(name: str, default: int, minimum: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from exc
    if minimum is not None and value < minimum:
        raise RuntimeError(f"{name} must be at least {minimum}, got {value}")
    return value


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class Config:
    database_url: str | None = None
    environment: str = "development"
    app_url: str = "http://localhost:8000"
    cron_secret: str | None = None

    email_user: str | None = None
    email_password: str | None = None
    email_from: str | None = None
    smtp_server: str = "smtp.gmail.com"
    smtp_port: int = 587

    reminder_batch_size: int = 100
    free_job_limit: int = 10

    stripe_secret_key: str | None = None
    stripe_webhook_secret: str | None = None
    stripe_price_id_lifetime: str | None = None

    cookie_secure: bool = False
    admin_email: str | None = None
    admin_password: str | None = None

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def effective_from(self) -> str:
        # Gmail rewrites or blocks mail whose From differs from the login.
        if "gmail" in (self.smtp_server or "").lower() and self.email_user:
            return self.email_user
        return self.email_from or self.email_user or DEFAULT_FROM


def load_config() -> Config:
    """Load `.env` (override=True so edits win after a restart) and build a Config."""
    load_dotenv(override=True)

    app_url = (os.getenv("PUBLIC_BASE_URL") or "http://localhost:8000").rstrip("/")
    return Config(
        database_url=os.getenv("DATABASE_URL"),
        environment=os.getenv("APP_ENV", "development"),
        app_url=app_url,
        cron_secret=os.getenv("CRON_SECRET") or None,
        email_user=os.getenv("EMAIL_USER"),
        email_password=os.getenv("EMAIL_PASSWORD"),
        email_from=os.getenv("EMAIL_FROM"),
        smtp_server=os.getenv("SMTP_SERVER", "smtp.gmail.com"),
        smtp_port=_env_int("SMTP_PORT", 587, minimum=1),
        reminder_batch_size=_env_int("REMINDER_BATCH_SIZE", 100, minimum=1),
        free_job_limit=_env_int("FREE_JOB_LIMIT", 10, minimum=0),
        stripe_secret_key=os.getenv("STRIPE_SECRET_KEY"),
        stripe_webhook_secret=os.getenv("STRIPE_WEBHOOK_SECRET"),
        stripe_price_id_lifetime=os.getenv("STRIPE_PRICE_ID_LIFETIME"),
        cookie_secure=_env_flag("COOKIE_SECURE") or app_url.lower().startswith("https://"),
        admin_email=os.getenv("ADMIN_EMAIL"),
        admin_password=os.getenv("ADMIN_PASSWORD"),
    )


__all__ = ["Config", "load_config", "DEFAULT_FROM"]
