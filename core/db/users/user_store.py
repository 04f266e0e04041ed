"""
User CRUD plus the per-user rows every account starts with.
"""
from __future__ import annotations

from typing import Dict, List, Optional

import bcrypt

from core.constants import (
    DEFAULT_APPLIED_FOLLOWUP_DAYS,
    DEFAULT_INTERVIEW_FOLLOWUP_DAYS,
    PLAN_FREE,
)
from core.db.base import get_conn


def hash_password(raw_password: str) -> str:
    return bcrypt.hashpw(raw_password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(raw_password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(raw_password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def create_user(email: str, raw_password: str, role: str = "user") -> int:
    """
    Insert a user and bootstrap a FREE entitlement and default reminder settings
    in the same transaction.
    """
    conn = get_conn()
    cur = conn.cursor()

    cur.execute(
        """
        INSERT INTO users (email, password_hash, role)
        VALUES (?, ?, ?)
        RETURNING id
        """,
        (email.strip().lower(), hash_password(raw_password), role),
    )
    row = cur.fetchone()
    user_id = int(row["id"])

    cur.execute(
        "INSERT INTO user_entitlements (user_id, plan) VALUES (?, ?)",
        (user_id, PLAN_FREE),
    )
    cur.execute(
        """
        INSERT INTO user_settings (user_id, applied_followup_days, interview_followup_days, reminders_enabled)
        VALUES (?, ?, ?, 1)
        """,
        (user_id, DEFAULT_APPLIED_FOLLOWUP_DAYS, DEFAULT_INTERVIEW_FOLLOWUP_DAYS),
    )

    conn.commit()
    conn.close()
    return user_id


def get_user_by_email(email: str) -> Dict | None:
    conn = get_conn()
    cur = conn.cursor()

    cur.execute(
        """
        SELECT id, email, password_hash, role, created_at
        FROM users
        WHERE email = ?
        """,
        (email.strip().lower(),),
    )
    row = cur.fetchone()
    conn.close()

    return dict(row) if row else None


def get_user_by_id(user_id: int) -> Optional[Dict]:
    """Look up a user by numeric id. Returns dict or None."""
    conn = get_conn()
    cur = conn.cursor()

    cur.execute(
        """
        SELECT id, email, password_hash, role, created_at
        FROM users
        WHERE id = ?
        """,
        (user_id,),
    )
    row = cur.fetchone()
    conn.close()

    return dict(row) if row else None


def list_users() -> List[Dict]:
    """All users with their plan, newest first (admin view)."""
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        SELECT u.id, u.email, u.role, u.created_at, COALESCE(e.plan, ?) AS plan
        FROM users u
        LEFT JOIN user_entitlements e ON e.user_id = u.id
        ORDER BY u.created_at DESC, u.id DESC
        """,
        (PLAN_FREE,),
    )
    rows = cur.fetchall()
    conn.close()
    return [dict(r) for r in rows]


def delete_user_data(user_id: int) -> bool:
    """
    Remove a user; sessions, settings, entitlement, resumes, jobs and reminders
    go with it via ON DELETE CASCADE.
    """
    conn = get_conn()
    cur = conn.cursor()
    # Jobs reference resumes with RESTRICT, so they have to go first.
    cur.execute("DELETE FROM job_applications WHERE user_id=?", (user_id,))
    cur.execute("DELETE FROM users WHERE id=?", (user_id,))
    deleted = cur.rowcount
    conn.commit()
    conn.close()
    return deleted > 0


__all__ = [
    "hash_password",
    "verify_password",
    "create_user",
    "get_user_by_email",
    "get_user_by_id",
    "list_users",
    "delete_user_data",
]
