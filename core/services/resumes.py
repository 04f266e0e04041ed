"""
Resume versions. A version referenced by any job cannot be deleted.
"""
from __future__ import annotations

from typing import Dict

from core import database as store
from core.errors import NotFound, ResumeInUse
from core.schemas import ResumeIn


def create_resume(user_id: int, resume: ResumeIn) -> Dict:
    data = resume.to_row()
    return store.create_resume(user_id, data["name"], data["url"])


def update_resume(user_id: int, resume_id: int, resume: ResumeIn) -> Dict:
    data = resume.to_row()
    updated = store.update_resume(user_id, resume_id, data["name"], data["url"])
    if not updated:
        raise NotFound("Resume")
    return updated


def delete_resume(user_id: int, resume_id: int) -> None:
    if store.count_jobs_using_resume(user_id, resume_id) > 0:
        raise ResumeInUse()
    if not store.delete_resume(user_id, resume_id):
        raise NotFound("Resume")


__all__ = ["create_resume", "update_resume", "delete_resume"]
