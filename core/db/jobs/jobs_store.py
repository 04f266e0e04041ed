"""
Job application storage helpers.

Every query filters on the owning user; a row belonging to someone else
behaves exactly like a missing row.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from core.constants import FOLLOWUP_STAGES, REMINDER_FOLLOW_UP
from core.db.base import get_conn

JOB_COLUMNS = (
    "id, user_id, company, role, location, url, status, applied_date, salary, notes, "
    "resume_version_id, last_touched_at, created_at, updated_at"
)

_EDITABLE = (
    "company",
    "role",
    "location",
    "url",
    "status",
    "applied_date",
    "salary",
    "notes",
    "resume_version_id",
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def list_jobs(user_id: int) -> List[Dict]:
    """Return the user's jobs with the linked resume name, most recently touched first."""
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        SELECT j.id, j.user_id, j.company, j.role, j.location, j.url, j.status,
               j.applied_date, j.salary, j.notes, j.resume_version_id,
               j.last_touched_at, j.created_at, j.updated_at,
               r.name AS resume_name
        FROM job_applications j
        LEFT JOIN resume_versions r ON r.id = j.resume_version_id
        WHERE j.user_id = ?
        ORDER BY j.last_touched_at DESC, j.id DESC
        """,
        (user_id,),
    )
    rows = cur.fetchall()
    conn.close()
    return [dict(r) for r in rows]


def get_job(user_id: int, job_id: int) -> Optional[Dict]:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        f"SELECT {JOB_COLUMNS} FROM job_applications WHERE id = ? AND user_id = ?",
        (job_id, user_id),
    )
    row = cur.fetchone()
    conn.close()
    return dict(row) if row else None


def count_jobs(user_id: int) -> int:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute("SELECT COUNT(*) AS count FROM job_applications WHERE user_id = ?", (user_id,))
    row = cur.fetchone()
    conn.close()
    return int(row["count"]) if row else 0


def count_jobs_using_resume(user_id: int, resume_id: int) -> int:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        "SELECT COUNT(*) AS count FROM job_applications WHERE user_id = ? AND resume_version_id = ?",
        (user_id, resume_id),
    )
    row = cur.fetchone()
    conn.close()
    return int(row["count"]) if row else 0


def create_job(user_id: int, data: Dict, now: datetime | None = None) -> Dict:
    """Insert a job; its staleness clock starts now."""
    now = now or _utcnow()
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        f"""
        INSERT INTO job_applications
          (user_id, company, role, location, url, status, applied_date, salary, notes,
           resume_version_id, last_touched_at, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        RETURNING {JOB_COLUMNS}
        """,
        (user_id, *(data.get(k) for k in _EDITABLE), now, now, now),
    )
    row = cur.fetchone()
    conn.commit()
    conn.close()
    return dict(row)


def update_job(user_id: int, job_id: int, data: Dict, now: datetime | None = None) -> Optional[Dict]:
    """
    Replace the editable fields. Any edit counts as a touch and refreshes last_touched_at.
    Moving the job out of the follow-up stages cancels its pending reminder in the
    same transaction. Returns None when no row matched.
    """
    now = now or _utcnow()
    assignments = ", ".join(f"{k} = ?" for k in _EDITABLE)
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        f"""
        UPDATE job_applications
        SET {assignments}, last_touched_at = ?, updated_at = ?
        WHERE id = ? AND user_id = ?
        RETURNING {JOB_COLUMNS}
        """,
        (*(data.get(k) for k in _EDITABLE), now, now, job_id, user_id),
    )
    row = cur.fetchone()
    if not row:
        conn.rollback()
        conn.close()
        return None

    if row["status"] not in FOLLOWUP_STAGES:
        _cancel_pending_reminders(cur, user_id, job_id, now)
    conn.commit()
    conn.close()
    return dict(row)


def delete_job(user_id: int, job_id: int) -> bool:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute("DELETE FROM job_applications WHERE id = ? AND user_id = ?", (job_id, user_id))
    deleted = cur.rowcount
    conn.commit()
    conn.close()
    return deleted > 0


def _cancel_pending_reminders(cur, user_id: int, job_id: int, now: datetime) -> None:
    cur.execute(
        """
        UPDATE reminders
        SET cancelled_at = ?
        WHERE job_application_id = ? AND user_id = ? AND type = ?
          AND sent_at IS NULL AND cancelled_at IS NULL
        """,
        (now, job_id, user_id, REMINDER_FOLLOW_UP),
    )


def touch_job(user_id: int, job_id: int, now: datetime | None = None) -> Optional[Dict]:
    """
    Mark a job as contacted: reset its staleness clock and cancel any pending
    follow-up reminder for it, in one transaction.
    """
    now = now or _utcnow()
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        f"""
        UPDATE job_applications
        SET last_touched_at = ?, updated_at = ?
        WHERE id = ? AND user_id = ?
        RETURNING {JOB_COLUMNS}
        """,
        (now, now, job_id, user_id),
    )
    row = cur.fetchone()
    if not row:
        conn.rollback()
        conn.close()
        return None

    _cancel_pending_reminders(cur, user_id, job_id, now)
    conn.commit()
    conn.close()
    return dict(row)


def set_job_last_touched(user_id: int, job_id: int, when: datetime) -> Optional[Dict]:
    """Backdate last_touched_at (development helper for exercising reminders)."""
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        f"""
        UPDATE job_applications
        SET last_touched_at = ?, updated_at = now()
        WHERE id = ? AND user_id = ?
        RETURNING {JOB_COLUMNS}
        """,
        (when, job_id, user_id),
    )
    row = cur.fetchone()
    conn.commit()
    conn.close()
    return dict(row) if row else None


def get_jobs_in_stages(user_id: int, stages: Iterable[str]) -> List[Dict]:
    """Bulk read of one user's jobs whose status is in `stages`."""
    stages = list(stages)
    if not stages:
        return []
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        f"""
        SELECT {JOB_COLUMNS}
        FROM job_applications
        WHERE user_id = ? AND status = ANY(?)
        ORDER BY id
        """,
        (user_id, stages),
    )
    rows = cur.fetchall()
    conn.close()
    return [dict(r) for r in rows]


__all__ = [
    "list_jobs",
    "get_job",
    "count_jobs",
    "count_jobs_using_resume",
    "create_job",
    "update_job",
    "delete_job",
    "touch_job",
    "set_job_last_touched",
    "get_jobs_in_stages",
]
