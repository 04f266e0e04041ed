from fastapi import APIRouter, Request

from app.auth_utils import require_user
from core.database import get_reminders_for_user

router = APIRouter()


@router.get("/reminders")
def reminders_history(request: Request):
    """Most recent follow-up reminders for the signed-in user, pending, sent or cancelled."""
    user = require_user(request)
    return {"reminders": get_reminders_for_user(user_id=user["id"])}
