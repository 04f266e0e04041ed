"""
Job lifecycle: CRUD plus the "contacted" touch that resets staleness.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Dict

from core import database as store
from core.config import Config
from core.errors import InvalidInput, NotFound, UpgradeRequired
from core.schemas import JobIn


def _check_resume_owned(user_id: int, resume_id: int | None) -> None:
    if resume_id is not None and store.get_resume(user_id, resume_id) is None:
        raise InvalidInput("resume_version_id", "resume version not found")


def get_job(user_id: int, job_id: int) -> Dict:
    job = store.get_job(user_id, job_id)
    if not job:
        raise NotFound("Job")
    return job


def create_job(config: Config, user_id: int, job: JobIn, now: datetime | None = None) -> Dict:
    data = job.to_row()

    if not store.is_paid_user(user_id) and store.count_jobs(user_id) >= config.free_job_limit:
        raise UpgradeRequired(
            f"Free tier limit reached ({config.free_job_limit} jobs max). Upgrade to add unlimited jobs."
        )

    _check_resume_owned(user_id, data["resume_version_id"])
    return store.create_job(user_id, data, now)


def update_job(user_id: int, job_id: int, job: JobIn, now: datetime | None = None) -> Dict:
    data = job.to_row()
    _check_resume_owned(user_id, data["resume_version_id"])

    updated = store.update_job(user_id, job_id, data, now)
    if not updated:
        raise NotFound("Job")
    return updated


def delete_job(user_id: int, job_id: int) -> None:
    if not store.delete_job(user_id, job_id):
        raise NotFound("Job")


def mark_job_contacted(user_id: int, job_id: int, now: datetime | None = None) -> Dict:
    """Reset the staleness clock and cancel the job's pending follow-up reminder."""
    job = store.touch_job(user_id, job_id, now)
    if not job:
        raise NotFound("Job")
    return job


def backdate_job(user_id: int, job_id: int, days_ago: int, now: datetime | None = None) -> Dict:
    if isinstance(days_ago, bool) or not isinstance(days_ago, int) or days_ago < 0:
        raise InvalidInput("days_ago", "must be a non-negative integer")
    now = now or datetime.now(timezone.utc)
    job = store.set_job_last_touched(user_id, job_id, now - timedelta(days=days_ago))
    if not job:
        raise NotFound("Job")
    return job


__all__ = [
    "get_job",
    "create_job",
    "update_job",
    "delete_job",
    "mark_job_contacted",
    "backdate_job",
]
