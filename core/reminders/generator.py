"""
Reminder generator.

Scans every paid user with reminders enabled, evaluates their in-flight jobs
against the staleness policy and records one follow-up reminder per newly
stale job. Safe to re-run: a job that already has an open reminder is skipped,
and the storage layer rejects a second pending reminder for the same job.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Dict, List

from core.constants import FOLLOWUP_STAGES, REMINDER_FOLLOW_UP
from core.database import (
    create_reminder,
    get_jobs_in_stages,
    get_reminder_eligible_users,
    get_user_settings,
    has_open_reminder,
)
from core.reminders.policy import is_due, trigger_at

log = logging.getLogger("reminders.generator")


def _generate_for_user(user: Dict, now: datetime) -> int:
    user_id = int(user["user_id"])
    generated = 0

    for job in get_jobs_in_stages(user_id, FOLLOWUP_STAGES):
        check = is_due(
            job["status"],
            job["last_touched_at"],
            now,
            user["applied_followup_days"],
            user["interview_followup_days"],
        )
        if not check.due:
            continue

        if has_open_reminder(
            user_id=user_id,
            job_id=job["id"],
            last_touched_at=job["last_touched_at"],
            reminder_type=REMINDER_FOLLOW_UP,
        ):
            continue

        reminder_id = create_reminder(
            user_id=user_id,
            job_id=job["id"],
            trigger_at=trigger_at(job["last_touched_at"], check.threshold_days),
            created_at=now,
            reminder_type=REMINDER_FOLLOW_UP,
        )
        if reminder_id is None:
            # An overlapping run inserted it between our check and insert.
            continue

        generated += 1
        log.debug(
            "Reminder created",
            extra={"user_id": user_id, "job_id": job["id"], "reminder_id": reminder_id},
        )

    return generated


def generate_reminders(now: datetime | None = None) -> Dict:
    """
    One generator pass. Returns {"generated": int, "timestamp": iso-string}.

    Storage errors propagate and abort the run; the next run picks up where
    this one stopped because every insert is guarded.
    """
    now = now or datetime.now(timezone.utc)
    users = get_reminder_eligible_users()
    log.info("Generating reminders", extra={"eligible_users": len(users)})

    generated = 0
    for user in users:
        generated += _generate_for_user(user, now)

    log.info("Reminder generation complete", extra={"generated": generated})
    return {"generated": generated, "timestamp": now.isoformat()}


def jobs_needing_followup(user_id: int, now: datetime | None = None) -> List[Dict]:
    """
    Read-only list of the user's stale jobs, using the same policy as the generator.
    Plan and the reminders-enabled flag do not matter here.
    """
    now = now or datetime.now(timezone.utc)
    settings = get_user_settings(user_id)
    if not settings:
        return []

    stale = []
    for job in get_jobs_in_stages(user_id, FOLLOWUP_STAGES):
        check = is_due(
            job["status"],
            job["last_touched_at"],
            now,
            settings["applied_followup_days"],
            settings["interview_followup_days"],
        )
        if check.due:
            stale.append(job)
    return stale


__all__ = ["generate_reminders", "jobs_needing_followup"]
