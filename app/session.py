"""
Per-request session context.

Handlers call `get_session_context(request)` and pass the result on explicitly
(to the layout, to the editor checks); nothing is stored globally.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from fastapi import Request

from core.database import get_profile_for_user, get_session
from core.profiles.models import Profile, Tier

SESSION_COOKIE_NAME = "session_id"


@dataclass(frozen=True)
class SessionContext:
    user_id: str
    email: str
    profile_id: Optional[str]
    tier: Tier

    @classmethod
    def for_profile(cls, user_id: str, profile: Optional[Profile]) -> "SessionContext":
        if profile is None:
            return cls(user_id=user_id, email="", profile_id=None, tier=Tier.FREE)
        return cls(
            user_id=user_id,
            email=profile.email,
            profile_id=profile.id,
            tier=profile.tier,
        )


def get_session_context(request: Request) -> Tuple[Optional[SessionContext], Optional[str]]:
    """
    Read the session cookie and return (context, token), or (None, token) when the
    session is missing or expired.
    """
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if not token:
        return None, None

    session = get_session(token)
    if not session:
        return None, token

    user_id = str(session["user_id"])
    profile = get_profile_for_user(user_id)
    return SessionContext.for_profile(user_id, profile), token
