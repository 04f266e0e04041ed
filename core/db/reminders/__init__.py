"""
Reminder storage re-exports.

Reminders are generated for stale jobs of paid users and later delivered by
the dispatcher. Deleting a job or a user removes its reminders by cascade.
"""
from core.db.reminders.reminders_store import (
    has_open_reminder,
    create_reminder,
    get_due_reminders,
    mark_reminder_sent,
    get_reminders_for_user,
    delete_reminders_for_user,
)

__all__ = [
    "has_open_reminder",
    "create_reminder",
    "get_due_reminders",
    "mark_reminder_sent",
    "get_reminders_for_user",
    "delete_reminders_for_user",
]
