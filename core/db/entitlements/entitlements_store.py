"""
Plan/entitlement storage (one row per user).
"""
from __future__ import annotations

from typing import Dict

from core.constants import PLAN_FREE, PLAN_PAID_LIFETIME, PLANS
from core.db.base import get_conn


def get_user_entitlement(user_id: int) -> Dict:
    """Return {"plan", "is_paid"}; a user without a row is on the free plan."""
    conn = get_conn()
    cur = conn.cursor()
    cur.execute("SELECT plan FROM user_entitlements WHERE user_id = ?", (user_id,))
    row = cur.fetchone()
    conn.close()

    plan = row["plan"] if row else PLAN_FREE
    return {"plan": plan, "is_paid": plan == PLAN_PAID_LIFETIME}


def is_paid_user(user_id: int) -> bool:
    return get_user_entitlement(user_id)["is_paid"]


def upgrade_user_to_paid_lifetime(user_id: int) -> None:
    """Upsert the lifetime plan; repeated webhook deliveries are harmless."""
    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        """
        INSERT INTO user_entitlements (user_id, plan)
        VALUES (?, ?)
        ON CONFLICT (user_id) DO UPDATE SET plan = EXCLUDED.plan, updated_at = now()
        """,
        (user_id, PLAN_PAID_LIFETIME),
    )
    conn.commit()
    conn.close()


def set_user_plan(user_id: int, plan: str) -> bool:
    """Overwrite an existing entitlement row. Returns False when the user has none."""
    if plan not in PLANS:
        raise ValueError(f"Invalid plan {plan!r}")

    conn = get_conn()
    cur = conn.cursor()
    cur.execute(
        "UPDATE user_entitlements SET plan = ?, updated_at = now() WHERE user_id = ?",
        (plan, user_id),
    )
    updated = cur.rowcount
    conn.commit()
    conn.close()
    return updated > 0


__all__ = [
    "get_user_entitlement",
    "is_paid_user",
    "upgrade_user_to_paid_lifetime",
    "set_user_plan",
]
