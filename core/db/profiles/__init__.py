"""
Profile storage re-exports.
"""
from core.db.profiles.profiles_store import (
    get_all_profiles,
    get_profile_by_id,
    get_profile_for_user,
    update_profile,
)

__all__ = [
    "get_all_profiles",
    "get_profile_by_id",
    "get_profile_for_user",
    "update_profile",
]
