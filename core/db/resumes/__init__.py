"""
Resume version storage re-exports.
"""
from core.db.resumes.resumes_store import (
    list_resumes,
    get_resume,
    create_resume,
    update_resume,
    delete_resume,
)

__all__ = [
    "list_resumes",
    "get_resume",
    "create_resume",
    "update_resume",
    "delete_resume",
]
