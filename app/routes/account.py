from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.auth_utils import clear_session_cookie, get_current_user, require_user
from core.database import delete_session, delete_user_data, get_user_entitlement
from core.errors import NotAuthenticated

router = APIRouter()


@router.get("/account")
def account(request: Request):
    user = require_user(request)
    return {
        "id": user["id"],
        "email": user["email"],
        "role": user["role"],
        "entitlement": get_user_entitlement(user["id"]),
    }


@router.post("/account/delete")
def delete_account(request: Request):
    user, token = get_current_user(request)
    if not user:
        raise NotAuthenticated()

    # Admins are managed from the environment, not self-service.
    if user.get("role") == "admin":
        return JSONResponse({"error": "Admin accounts cannot be deleted here."}, status_code=403)

    delete_user_data(user["id"])
    if token:
        delete_session(token)
    response = JSONResponse({"success": True})
    clear_session_cookie(response)
    return response
