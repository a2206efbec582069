"""
Form protection for the profile editor: a double-submit CSRF token and a
per-account save throttle.
"""
from __future__ import annotations

import hmac
import os
import secrets
import time
from typing import Dict, List, Tuple

CSRF_COOKIE_NAME = "csrf_token"
SECURE_COOKIES = (
    os.getenv("COOKIE_SECURE", "").lower() in ("1", "true", "yes")
    or os.getenv("PUBLIC_BASE_URL", "").lower().startswith("https://")
)

EDIT_WINDOW_SECONDS = 60


def csrf_token_for(request) -> str:
    """The editor keeps one token per browser until the cookie goes away."""
    return request.cookies.get(CSRF_COOKIE_NAME) or secrets.token_urlsafe(16)


def attach_csrf_cookie(response, token: str) -> None:
    response.set_cookie(
        key=CSRF_COOKIE_NAME,
        value=token,
        httponly=False,  # read back into the hidden form field
        samesite="lax",
        secure=SECURE_COOKIES,
    )


def validate_csrf(request, form_token: str | None) -> bool:
    cookie_token = request.cookies.get(CSRF_COOKIE_NAME) or ""
    if not cookie_token or not form_token:
        return False
    return hmac.compare_digest(cookie_token, form_token)


# per-process; saves are keyed by account and client address
_edit_history: Dict[str, List[float]] = {}


def allow_profile_save(user_id: str, client_host: str, limit: int) -> Tuple[bool, int]:
    """
    Record a save attempt. Returns (allowed, retry_after_seconds); retry_after is 0
    when the save may go ahead.
    """
    key = f"{user_id}:{client_host}"
    now = time.time()
    recent = [t for t in _edit_history.get(key, []) if t > now - EDIT_WINDOW_SECONDS]
    if len(recent) >= limit:
        _edit_history[key] = recent
        return False, max(1, int(recent[0] + EDIT_WINDOW_SECONDS - now) + 1)
    recent.append(now)
    _edit_history[key] = recent
    return True, 0


def reset_rate_limits() -> None:
    _edit_history.clear()


__all__ = [
    "CSRF_COOKIE_NAME",
    "EDIT_WINDOW_SECONDS",
    "csrf_token_for",
    "attach_csrf_cookie",
    "validate_csrf",
    "allow_profile_save",
    "reset_rate_limits",
]
