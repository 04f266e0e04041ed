"""
Shared-secret checks for machine callers and an in-memory login rate limit.
"""
from __future__ import annotations

import hmac
import time
from typing import Dict, Tuple


def bearer_matches(request, secret: str | None) -> bool:
    """
    Compare `Authorization: Bearer <secret>` in constant time.
    With no secret configured every caller is accepted.
    """
    if not secret:
        return True
    header = request.headers.get("authorization") or ""
    return hmac.compare_digest(header, f"Bearer {secret}")


# -------- Rate limiting (in-memory) --------
_rate_state: Dict[str, list[float]] = {}


def allow_request_with_remaining(key: str, limit: int = 5, window_seconds: int = 60) -> Tuple[bool, int]:
    """
    Sliding-window rate limit with remaining-count feedback.
    Returns (allowed, remaining_after).
    """
    now = time.time()
    window_start = now - window_seconds
    history = [t for t in _rate_state.get(key, []) if t > window_start]
    if len(history) >= limit:
        _rate_state[key] = history
        return False, 0
    history.append(now)
    _rate_state[key] = history
    return True, max(0, limit - len(history))


def reset_rate_limits() -> None:
    _rate_state.clear()


__all__ = [
    "bearer_matches",
    "allow_request_with_remaining",
    "reset_rate_limits",
]
