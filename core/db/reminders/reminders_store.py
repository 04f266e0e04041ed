"""
Reminder storage.

A reminder is pending while both sent_at and cancelled_at are NULL. The partial
unique index `reminders_one_pending_per_job` guarantees at most one pending
reminder per (job, type); inserts use ON CONFLICT DO NOTHING against it.
"""
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from core.constants import FOLLOWUP_STAGES, PLAN_PAID_LIFETIME, REMINDER_FOLLOW_UP
from core.db.base import get_conn

_COLUMNS = "id, user_id, job_application_id, type, trigger_at, sent_at, cancelled_at, created_at"


def has_open_reminder(
    *,
    user_id: int,
    job_id: int,
    last_touched_at: datetime,
    reminder_type: str = REMINDER_FOLLOW_UP,
) -> bool:
    """
    True when the job already has a non-cancelled reminder for its current
    staleness window: either still pending, or sent after the job was last touched.
    """
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        SELECT 1
        FROM reminders
        WHERE job_application_id = ? AND user_id = ? AND type = ?
          AND cancelled_at IS NULL
          AND (sent_at IS NULL OR sent_at >= ?)
        LIMIT 1
        """,
        (job_id, user_id, reminder_type, last_touched_at),
    )
    row = cur.fetchone()
    conn.close()
    return row is not None


def create_reminder(
    *,
    user_id: int,
    job_id: int,
    trigger_at: datetime,
    created_at: datetime,
    reminder_type: str = REMINDER_FOLLOW_UP,
) -> Optional[int]:
    """
    Insert a pending reminder. Returns the new id, or None when a pending one
    already exists for this job (lost a race with an overlapping run).
    """
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        INSERT INTO reminders (user_id, job_application_id, type, trigger_at, created_at)
        VALUES (?, ?, ?, ?, ?)
        ON CONFLICT (job_application_id, type) WHERE sent_at IS NULL AND cancelled_at IS NULL
        DO NOTHING
        RETURNING id
        """,
        (user_id, job_id, reminder_type, trigger_at, created_at),
    )
    row = cur.fetchone()
    conn.commit()
    conn.close()
    return int(row["id"]) if row else None


def get_due_reminders(*, now: datetime, limit: int = 100) -> List[Dict]:
    """
    Pending reminders whose trigger time has passed, joined with the owner's
    address and the job details needed for the message. Oldest trigger first.

    Only owners on the paid plan, and only jobs still in a follow-up stage,
    are returned; anything else stays pending and unsent.
    """
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        SELECT
          r.id AS reminder_id,
          r.user_id,
          r.job_application_id AS job_id,
          r.trigger_at,
          u.email,
          j.company,
          j.role,
          j.status,
          j.last_touched_at
        FROM reminders r
        JOIN users u ON u.id = r.user_id
        JOIN job_applications j ON j.id = r.job_application_id AND j.user_id = r.user_id
        JOIN user_entitlements e ON e.user_id = r.user_id
        WHERE r.trigger_at <= ? AND r.sent_at IS NULL AND r.cancelled_at IS NULL
          AND e.plan = ?
          AND j.status = ANY(?)
        ORDER BY r.trigger_at, r.id
        LIMIT ?
        """,
        (now, PLAN_PAID_LIFETIME, list(FOLLOWUP_STAGES), int(limit)),
    )
    rows = cur.fetchall()
    conn.close()
    return [dict(r) for r in rows]


def mark_reminder_sent(*, reminder_id: int, sent_at: datetime) -> bool:
    """Set sent_at once; a reminder that is already marked is left alone."""
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        "UPDATE reminders SET sent_at = ? WHERE id = ? AND sent_at IS NULL",
        (sent_at, reminder_id),
    )
    updated = cur.rowcount
    conn.commit()
    conn.close()
    return updated > 0


def get_reminders_for_user(*, user_id: int, limit: int = 200) -> List[Dict]:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        f"""
        SELECT {_COLUMNS}
        FROM reminders
        WHERE user_id = ?
        ORDER BY created_at DESC, id DESC
        LIMIT ?
        """,
        (user_id, int(limit)),
    )
    rows = cur.fetchall()
    conn.close()
    return [dict(r) for r in rows]


def delete_reminders_for_user(user_id: int) -> int:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute("DELETE FROM reminders WHERE user_id = ?", (user_id,))
    deleted = cur.rowcount
    conn.commit()
    conn.close()
    return deleted


__all__ = [
    "has_open_reminder",
    "create_reminder",
    "get_due_reminders",
    "mark_reminder_sent",
    "get_reminders_for_user",
    "delete_reminders_for_user",
]
