"""
CSV / JSON export of a user's job applications (paid plan only).
"""
from __future__ import annotations

import csv
import io
import json
from datetime import datetime, timezone
from typing import Dict, List

from core import database as store
from core.errors import UpgradeRequired

CSV_HEADERS = [
    "Company",
    "Role",
    "Location",
    "Status",
    "Applied Date",
    "Salary",
    "Resume",
    "Notes",
    "URL",
    "Last Touched",
    "Created",
    "ID",
]


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _paid_jobs(user_id: int, label: str) -> List[Dict]:
    if not store.is_paid_user(user_id):
        raise UpgradeRequired(
            f"{label} export is only available for paid users. Please upgrade to access this feature."
        )
    return store.list_jobs(user_id)


def export_jobs_csv(user_id: int) -> str:
    jobs = _paid_jobs(user_id, "CSV")

    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for job in jobs:
        writer.writerow(
            [
                job.get("company") or "",
                job.get("role") or "",
                job.get("location") or "",
                job.get("status") or "",
                _iso(job.get("applied_date")) or "",
                job.get("salary") or "",
                job.get("resume_name") or "",
                job.get("notes") or "",
                job.get("url") or "",
                _iso(job.get("last_touched_at")) or "",
                _iso(job.get("created_at")) or "",
                job.get("id"),
            ]
        )
    return buf.getvalue()


def export_jobs_json(user_id: int, now: datetime | None = None) -> str:
    jobs = _paid_jobs(user_id, "JSON")
    now = now or datetime.now(timezone.utc)

    payload = {
        "export_date": now.isoformat(),
        "total_jobs": len(jobs),
        "jobs": [
            {
                "id": job["id"],
                "company": job.get("company"),
                "role": job.get("role"),
                "location": job.get("location"),
                "url": job.get("url"),
                "status": job.get("status"),
                "applied_date": _iso(job.get("applied_date")),
                "salary": job.get("salary"),
                "notes": job.get("notes"),
                "resume": {"id": job.get("resume_version_id"), "name": job.get("resume_name")},
                "last_touched_at": _iso(job.get("last_touched_at")),
                "created_at": _iso(job.get("created_at")),
            }
            for job in jobs
        ],
    }
    return json.dumps(payload, indent=2)


__all__ = ["CSV_HEADERS", "export_jobs_csv", "export_jobs_json"]
