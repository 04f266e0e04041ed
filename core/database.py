"""
Single import point for the storage layer used by routes, services and the worker.
"""
from core.db.base import configure_database, get_conn
from core.db.schema import init_db
from core.db.users import (
    hash_password,
    verify_password,
    create_user,
    get_user_by_email,
    get_user_by_id,
    list_users,
    delete_user_data,
    create_session,
    delete_session,
    get_session,
    touch_session,
    SESSION_TIMEOUT_MINUTES,
)
from core.db.entitlements import (
    get_user_entitlement,
    is_paid_user,
    upgrade_user_to_paid_lifetime,
    set_user_plan,
)
from core.db.settings import (
    get_user_settings,
    ensure_user_settings,
    update_user_settings,
    get_reminder_eligible_users,
)
from core.db.jobs import (
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
from core.db.resumes import (
    list_resumes,
    get_resume,
    create_resume,
    update_resume,
    delete_resume,
)
from core.db.reminders import (
    has_open_reminder,
    create_reminder,
    get_due_reminders,
    mark_reminder_sent,
    get_reminders_for_user,
    delete_reminders_for_user,
)

__all__ = [
    "configure_database",
    "get_conn",
    "init_db",
    "hash_password",
    "verify_password",
    "create_user",
    "get_user_by_email",
    "get_user_by_id",
    "list_users",
    "delete_user_data",
    "create_session",
    "delete_session",
    "get_session",
    "touch_session",
    "SESSION_TIMEOUT_MINUTES",
    "get_user_entitlement",
    "is_paid_user",
    "upgrade_user_to_paid_lifetime",
    "set_user_plan",
    "get_user_settings",
    "ensure_user_settings",
    "update_user_settings",
    "get_reminder_eligible_users",
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
    "list_resumes",
    "get_resume",
    "create_resume",
    "update_resume",
    "delete_resume",
    "has_open_reminder",
    "create_reminder",
    "get_due_reminders",
    "mark_reminder_sent",
    "get_reminders_for_user",
    "delete_reminders_for_user",
]
