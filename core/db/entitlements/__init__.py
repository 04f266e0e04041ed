"""
Entitlement storage re-exports.
"""
from core.db.entitlements.entitlements_store import (
    get_user_entitlement,
    is_paid_user,
    upgrade_user_to_paid_lifetime,
    set_user_plan,
)

__all__ = [
    "get_user_entitlement",
    "is_paid_user",
    "upgrade_user_to_paid_lifetime",
    "set_user_plan",
]
