"""
Job application storage re-exports.
"""
from core.db.jobs.jobs_store import (
    list_jobs,
    get_job,
    count_jobs,
    count_jobs_using_resume,
    create_job,
    update_job,
    delete_job,
    touch_job,
    set_job_last_touched,
    get_jobs_in_stages,
)

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
