"""
User settings storage re-exports.
"""
from core.db.settings.settings_store import (
    get_user_settings,
    ensure_user_settings,
    update_user_settings,
    get_reminder_eligible_users,
)

__all__ = [
    "get_user_settings",
    "ensure_user_settings",
    "update_user_settings",
    "get_reminder_eligible_users",
]
