"""
Per-user reminder settings.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from core.constants import PLAN_PAID_LIFETIME
from core.db.base import get_conn

_COLUMNS = "user_id, applied_followup_days, interview_followup_days, reminders_enabled"


def get_user_settings(user_id: int) -> Optional[Dict]:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(f"SELECT {_COLUMNS} FROM user_settings WHERE user_id = ?", (user_id,))
    row = cur.fetchone()
    conn.close()
    return dict(row) if row else None


def ensure_user_settings(user_id: int) -> Dict:
    """Return the settings row, inserting the defaults first if it is missing."""
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        "INSERT INTO user_settings (user_id) VALUES (?) ON CONFLICT (user_id) DO NOTHING",
        (user_id,),
    )
    cur.execute(f"SELECT {_COLUMNS} FROM user_settings WHERE user_id = ?", (user_id,))
    row = cur.fetchone()
    conn.commit()
    conn.close()
    return dict(row)


def update_user_settings(
    user_id: int,
    *,
    applied_followup_days: int,
    interview_followup_days: int,
    reminders_enabled: bool,
) -> Dict:
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        f"""
        INSERT INTO user_settings (user_id, applied_followup_days, interview_followup_days, reminders_enabled)
        VALUES (?, ?, ?, ?)
        ON CONFLICT (user_id) DO UPDATE SET
            applied_followup_days = EXCLUDED.applied_followup_days,
            interview_followup_days = EXCLUDED.interview_followup_days,
            reminders_enabled = EXCLUDED.reminders_enabled,
            updated_at = now()
        RETURNING {_COLUMNS}
        """,
        (user_id, applied_followup_days, interview_followup_days, 1 if reminders_enabled else 0),
    )
    row = cur.fetchone()
    conn.commit()
    conn.close()
    return dict(row)


def get_reminder_eligible_users() -> List[Dict]:
    """
    Users with reminders switched on AND a paid plan.

    Free users are left out even with reminders enabled.
    """
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        SELECT s.user_id, s.applied_followup_days, s.interview_followup_days
        FROM user_settings s
        JOIN user_entitlements e ON e.user_id = s.user_id
        WHERE s.reminders_enabled = 1 AND e.plan = ?
        ORDER BY s.user_id
        """,
        (PLAN_PAID_LIFETIME,),
    )
    rows = cur.fetchall()
    conn.close()
    return [dict(r) for r in rows]


__all__ = [
    "get_user_settings",
    "ensure_user_settings",
    "update_user_settings",
    "get_reminder_eligible_users",
]
