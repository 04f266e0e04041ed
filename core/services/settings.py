"""
Reminder settings for the signed-in user.
"""
from __future__ import annotations

from typing import Dict

from core import database as store
from core.schemas import SettingsIn


def _public(row: Dict) -> Dict:
    return {
        "applied_followup_days": row["applied_followup_days"],
        "interview_followup_days": row["interview_followup_days"],
        "reminders_enabled": bool(row["reminders_enabled"]),
    }


def get_settings(user_id: int) -> Dict:
    return _public(store.ensure_user_settings(user_id))


def update_settings(user_id: int, settings: SettingsIn) -> Dict:
    return _public(store.update_user_settings(user_id, **settings.model_dump()))


__all__ = ["get_settings", "update_settings"]
