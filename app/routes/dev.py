"""
Development-only helpers for exercising the reminder flow by hand.
All of them answer 403 when APP_ENV is production.
"""
from typing import Dict

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from app.auth_utils import get_config, require_user
from core.constants import PLANS
from core.database import delete_reminders_for_user, set_user_plan
from core.services.jobs import backdate_job

router = APIRouter()


def _production_block(request: Request):
    if get_config(request).is_production:
        return JSONResponse({"error": "This endpoint is only available in development"}, status_code=403)
    return None


@router.post("/dev/touch-job")
def dev_touch_job(request: Request, payload: Dict = Body(...)):
    blocked = _production_block(request)
    if blocked:
        return blocked
    user = require_user(request)

    job_id = payload.get("job_id")
    days_ago = payload.get("days_ago")
    if job_id is None or days_ago is None:
        return JSONResponse({"error": "Missing required fields: job_id, days_ago"}, status_code=400)

    try:
        job_id = int(job_id)
    except (TypeError, ValueError):
        return JSONResponse({"error": "job_id must be an integer"}, status_code=400)

    job = backdate_job(user["id"], job_id, days_ago)
    return {
        "success": True,
        "job": job,
        "message": f"Job last_touched_at set to {days_ago} days ago ({job['last_touched_at'].isoformat()})",
    }


@router.post("/dev/reset-reminders")
def dev_reset_reminders(request: Request):
    blocked = _production_block(request)
    if blocked:
        return blocked
    user = require_user(request)

    count = delete_reminders_for_user(user["id"])
    return {"success": True, "count": count, "message": f"Deleted {count} reminder(s)"}


@router.post("/dev/set-plan")
def dev_set_plan(request: Request, payload: Dict = Body(...)):
    blocked = _production_block(request)
    if blocked:
        return blocked
    user = require_user(request)

    plan = payload.get("plan")
    if plan not in PLANS:
        return JSONResponse({"error": "Invalid plan. Must be FREE or PAID_LIFETIME"}, status_code=400)
    if not set_user_plan(user["id"], plan):
        return JSONResponse({"error": "User not found"}, status_code=404)
    return {"success": True, "message": f"User plan updated to {plan}", "plan": plan}
