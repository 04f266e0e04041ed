from fastapi import APIRouter, Form, Request
from fastapi.responses import JSONResponse

from app.auth_utils import require_admin
from core.database import create_user, delete_user_data, get_user_by_email, list_users
from core.validators import is_valid_email, is_valid_password

router = APIRouter()


@router.get("/admin/users")
def admin_list_users(request: Request):
    require_admin(request)
    return {"users": list_users()}


@router.post("/admin/users", status_code=201)
def admin_create_user(
    request: Request,
    email: str = Form(..., max_length=254),
    password: str = Form(..., max_length=64),
    role: str = Form("user"),
):
    require_admin(request)

    email = (email or "").strip().lower()
    if not is_valid_email(email):
        return JSONResponse({"error": "email: invalid address"}, status_code=400)
    if not is_valid_password(password):
        return JSONResponse({"error": "password: too weak"}, status_code=400)
    if role not in ("user", "admin"):
        return JSONResponse({"error": "role: must be user or admin"}, status_code=400)
    if get_user_by_email(email):
        return JSONResponse({"error": "User with this email already exists"}, status_code=409)

    user_id = create_user(email, password, role=role)
    return {"id": user_id, "email": email, "role": role}


@router.delete("/admin/users/{user_id}")
def admin_delete_user(request: Request, user_id: int):
    admin = require_admin(request)
    if int(admin["id"]) == user_id:
        return JSONResponse({"error": "You cannot delete your own account here."}, status_code=400)
    if not delete_user_data(user_id):
        return JSONResponse({"error": "User not found"}, status_code=404)
    return {"success": True}
