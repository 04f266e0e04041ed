from fastapi import APIRouter, Request

from app.auth_utils import require_user
from core.schemas import SettingsIn
from core.services import settings as settings_service

router = APIRouter()


@router.get("/settings")
def settings_show(request: Request):
    user = require_user(request)
    return settings_service.get_settings(user["id"])


@router.put("/settings")
def settings_update(request: Request, settings: SettingsIn):
    user = require_user(request)
    return settings_service.update_settings(user["id"], settings)
