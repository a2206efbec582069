"""
Storage facade used by the web layer.
"""
from core.db.profiles import (
    get_all_profiles,
    get_profile_by_id,
    get_profile_for_user,
    update_profile,
)
from core.db.sessions import get_session

__all__ = [
    "get_all_profiles",
    "get_profile_by_id",
    "get_profile_for_user",
    "update_profile",
    "get_session",
]
