"""
Helpers for session cookies and current-user lookup.

Tracker routes call `require_user`, which fails closed: no session, no access.
"""
from __future__ import annotations

from fastapi import Request
from fastapi.responses import Response

from core.config import Config
from core.database import delete_session, get_session, get_user_by_id, touch_session
from core.errors import Forbidden, NotAuthenticated

SESSION_COOKIE_NAME = "session_id"
SESSION_COOKIE_MAX_AGE = 1800  # 30 minutes


def get_config(request: Request) -> Config:
    return request.app.state.config


def get_current_user(request: Request):
    """
    Read session cookie and return (user_dict, session_token) or (None, None).
    Refreshes inactivity timeout when the session is valid.
    """
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if not token:
        return None, None

    session = get_session(token)
    if not session:
        return None, token

    user = get_user_by_id(session["user_id"])
    if not user:
        delete_session(token)
        return None, token

    touch_session(token)
    return user, token


def require_user(request: Request) -> dict:
    user, _ = get_current_user(request)
    if not user:
        raise NotAuthenticated()
    return user


def require_admin(request: Request) -> dict:
    user = require_user(request)
    if user.get("role") != "admin":
        raise Forbidden()
    return user


def set_session_cookie(response: Response, token: str, *, secure: bool = False) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        max_age=SESSION_COOKIE_MAX_AGE,
        samesite="lax",
        secure=secure,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(SESSION_COOKIE_NAME)
