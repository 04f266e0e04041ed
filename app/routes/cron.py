"""
Endpoints for the external scheduler. Each call runs one bounded batch.
"""
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.auth_utils import get_config
from app.email_utils import SmtpTransport
from app.security import bearer_matches
from core.reminders.dispatcher import send_due_reminders
from core.reminders.generator import generate_reminders

router = APIRouter()
log = logging.getLogger("cron")


def _unauthorized():
    return JSONResponse({"error": "Unauthorized"}, status_code=401)


@router.get("/cron/generate-reminders")
def cron_generate_reminders(request: Request):
    config = get_config(request)
    if not bearer_matches(request, config.cron_secret):
        return _unauthorized()

    try:
        result = generate_reminders()
    except Exception as exc:
        log.exception("Error generating reminders")
        return JSONResponse({"success": False, "error": str(exc)}, status_code=500)
    return {"success": True, **result}


@router.get("/cron/send-reminders")
def cron_send_reminders(request: Request):
    config = get_config(request)
    if not bearer_matches(request, config.cron_secret):
        return _unauthorized()

    try:
        transport = SmtpTransport.from_config(config)
        result = send_due_reminders(config, transport)
    except Exception as exc:
        log.exception("Error sending reminders")
        return JSONResponse({"success": False, "error": str(exc)}, status_code=500)
    return {"success": True, **result}
