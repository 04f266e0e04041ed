"""
Schema and migration helpers for Postgres.
"""
from __future__ import annotations

import os

from core.constants import JOB_STAGES, PLANS, REMINDER_FOLLOW_UP
from core.db.base import get_conn
from core.db.users import create_user, get_user_by_email, hash_password

def _sql_list(values) -> str:
    return ", ".join(f"'{v}'" for v in values)


TABLES = [
    "reminders",
    "job_applications",
    "resume_versions",
    "user_settings",
    "user_entitlements",
    "sessions",
    "users",
]


def init_db() -> None:
    """Create the tracker tables and indexes if they don't exist."""
    conn = get_conn()
    cur = conn.cursor()

    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS users(
            id SERIAL PRIMARY KEY,
            email TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            role TEXT NOT NULL DEFAULT 'user',
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
        """
    )
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS sessions(
            id TEXT PRIMARY KEY,
            user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            created_at TIMESTAMPTZ NOT NULL,
            last_seen_at TIMESTAMPTZ NOT NULL,
            expires_at TIMESTAMPTZ NOT NULL
        )
        """
    )
    cur.execute(
        f"""
        CREATE TABLE IF NOT EXISTS user_entitlements(
            user_id INTEGER PRIMARY KEY REFERENCES users(id) ON DELETE CASCADE,
            plan TEXT NOT NULL DEFAULT 'FREE' CHECK (plan IN ({_sql_list(PLANS)})),
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
        """
    )
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS user_settings(
            user_id INTEGER PRIMARY KEY REFERENCES users(id) ON DELETE CASCADE,
            applied_followup_days INTEGER NOT NULL DEFAULT 7,
            interview_followup_days INTEGER NOT NULL DEFAULT 5,
            reminders_enabled INTEGER NOT NULL DEFAULT 1,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
        """
    )
    cur.execute(
        """
        CREATE TABLE IF NOT EXISTS resume_versions(
            id SERIAL PRIMARY KEY,
            user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            name TEXT NOT NULL,
            url TEXT NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
        """
    )
    cur.execute(
        f"""
        CREATE TABLE IF NOT EXISTS job_applications(
            id SERIAL PRIMARY KEY,
            user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            company TEXT NOT NULL,
            role TEXT NOT NULL,
            location TEXT,
            url TEXT,
            status TEXT NOT NULL DEFAULT 'SAVED'
                CHECK (status IN ({_sql_list(JOB_STAGES)})),
            applied_date TIMESTAMPTZ,
            salary TEXT,
            notes TEXT,
            resume_version_id INTEGER REFERENCES resume_versions(id) ON DELETE RESTRICT,
            last_touched_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
        """
    )
    cur.execute(
        f"""
        CREATE TABLE IF NOT EXISTS reminders(
            id SERIAL PRIMARY KEY,
            user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            job_application_id INTEGER NOT NULL REFERENCES job_applications(id) ON DELETE CASCADE,
            type TEXT NOT NULL DEFAULT '{REMINDER_FOLLOW_UP}',
            trigger_at TIMESTAMPTZ NOT NULL,
            sent_at TIMESTAMPTZ,
            cancelled_at TIMESTAMPTZ,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
        """
    )
    cur.execute(
        "CREATE INDEX IF NOT EXISTS job_applications_user_status ON job_applications (user_id, status)"
    )
    cur.execute(
        """
        CREATE INDEX IF NOT EXISTS reminders_due
        ON reminders (trigger_at)
        WHERE sent_at IS NULL AND cancelled_at IS NULL
        """
    )
    # At most one pending reminder of a type per job, even with overlapping generator runs.
    cur.execute(
        """
        CREATE UNIQUE INDEX IF NOT EXISTS reminders_one_pending_per_job
        ON reminders (job_application_id, type)
        WHERE sent_at IS NULL AND cancelled_at IS NULL
        """
    )

    conn.commit()
    conn.close()

    ensure_admin_from_env()


def ensure_admin_from_env() -> None:
    """
    Optionally seed/update an admin account from environment variables.
    Set ADMIN_EMAIL and ADMIN_PASSWORD before startup to use.
    """
    admin_email = os.getenv("ADMIN_EMAIL")
    admin_password = os.getenv("ADMIN_PASSWORD")

    if not admin_email or not admin_password:
        return

    existing = get_user_by_email(admin_email)
    if existing:
        conn = get_conn()
        cur = conn.cursor()
        cur.execute(
            "UPDATE users SET role='admin', password_hash=? WHERE email=?",
            (hash_password(admin_password), admin_email.strip().lower()),
        )
        conn.commit()
        conn.close()
        return

    create_user(admin_email, admin_password, role="admin")


__all__ = [
    "TABLES",
    "init_db",
    "ensure_admin_from_env",
]
