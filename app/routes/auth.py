from fastapi import APIRouter, Form, Request
from fastapi.responses import JSONResponse

from app.auth_utils import clear_session_cookie, get_config, get_current_user, set_session_cookie
from app.security import allow_request_with_remaining
from core.database import (
    create_session,
    create_user,
    delete_session,
    get_user_by_email,
    verify_password,
)
from core.validators import is_valid_email, is_valid_password

router = APIRouter()


def _client_ip(request: Request) -> str:
    return request.client.host if request and request.client else "unknown"


@router.post("/signup")
def signup(
    request: Request,
    email: str = Form(..., max_length=254),
    password: str = Form(..., max_length=64),
):
    allowed, _ = allow_request_with_remaining(f"signup:{_client_ip(request)}", limit=5, window_seconds=300)
    if not allowed:
        return JSONResponse({"error": "Too many signup attempts. Please try again later."}, status_code=429)

    email = (email or "").strip().lower()
    if not is_valid_email(email):
        return JSONResponse({"error": "email: invalid address"}, status_code=400)
    if not is_valid_password(password):
        return JSONResponse(
            {"error": "password: 8-64 characters with at least one letter and one number"},
            status_code=400,
        )
    if get_user_by_email(email):
        return JSONResponse({"error": "An account already exists for that email."}, status_code=409)

    user_id = create_user(email, password)
    token = create_session(user_id)
    response = JSONResponse({"id": user_id, "email": email}, status_code=201)
    set_session_cookie(response, token, secure=get_config(request).cookie_secure)
    return response


@router.post("/login")
def login(
    request: Request,
    email: str = Form(..., max_length=254),
    password: str = Form(..., max_length=64),
):
    allowed, remaining = allow_request_with_remaining(f"login:{_client_ip(request)}", limit=10, window_seconds=300)
    if not allowed:
        return JSONResponse({"error": "Too many login attempts. Please try again later."}, status_code=429)

    user = get_user_by_email(email)
    if not user or not verify_password(password, user["password_hash"]):
        return JSONResponse(
            {"error": "Incorrect email or password.", "attempts_left": remaining},
            status_code=401,
        )

    token = create_session(user["id"])
    response = JSONResponse({"id": user["id"], "email": user["email"], "role": user["role"]})
    set_session_cookie(response, token, secure=get_config(request).cookie_secure)
    return response


@router.post("/logout")
def logout(request: Request):
    _, token = get_current_user(request)
    if token:
        delete_session(token)
    response = JSONResponse({"success": True})
    clear_session_cookie(response)
    return response
