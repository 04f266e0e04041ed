"""
Request bodies for jobs, resumes and settings.

FastAPI validates these before a route runs; a failure is answered with
`{"error": "<field>: <message>"}` and a 400 (see app/api.py).
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Literal, Optional

from pydantic import BaseModel, HttpUrl, PositiveInt, StrictBool, conint, constr, field_validator

JobStage = Literal[
    "SAVED",
    "APPLIED",
    "RECRUITER_SCREEN",
    "TECHNICAL",
    "ONSITE",
    "OFFER",
    "REJECTED",
    "GHOSTED",
]

FollowupDays = conint(strict=True, ge=1, le=365)


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class JobIn(BaseModel):
    company: constr(strip_whitespace=True, min_length=1, max_length=160)
    role: constr(strip_whitespace=True, min_length=1, max_length=160)
    location: Optional[constr(strip_whitespace=True, max_length=160)] = None
    url: Optional[HttpUrl] = None
    status: JobStage = "SAVED"
    applied_date: Optional[datetime] = None
    salary: Optional[constr(strip_whitespace=True, max_length=100)] = None
    notes: Optional[constr(strip_whitespace=True)] = None
    resume_version_id: Optional[PositiveInt] = None

    @field_validator("location", "url", "applied_date", "salary", "notes", "resume_version_id", mode="before")
    @classmethod
    def _empty_is_missing(cls, value):
        return _blank_to_none(value)

    @field_validator("applied_date")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def to_row(self) -> Dict:
        """Column values for the job store."""
        row = self.model_dump()
        row["url"] = str(self.url) if self.url else None
        return row


class ResumeIn(BaseModel):
    name: constr(strip_whitespace=True, min_length=1, max_length=100)
    url: HttpUrl

    def to_row(self) -> Dict:
        return {"name": self.name, "url": str(self.url)}


class SettingsIn(BaseModel):
    applied_followup_days: FollowupDays
    interview_followup_days: FollowupDays
    reminders_enabled: StrictBool = True


__all__ = ["JobStage", "JobIn", "ResumeIn", "SettingsIn"]
