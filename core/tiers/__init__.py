"""
Tier policy re-exports.
"""
from core.tiers.policy import (
    TIER_LIMITS,
    ProfileEdit,
    ProfileEditError,
    TierLimits,
    UnknownTierError,
    can_add_portfolio_link,
    can_add_skill,
    clamp_bio,
    days_until_expiry,
    format_limit,
    is_expired,
    sanitize_profile_edit,
    tier_limits_for,
)

__all__ = [
    "TIER_LIMITS",
    "ProfileEdit",
    "ProfileEditError",
    "TierLimits",
    "UnknownTierError",
    "can_add_portfolio_link",
    "can_add_skill",
    "clamp_bio",
    "days_until_expiry",
    "format_limit",
    "is_expired",
    "sanitize_profile_edit",
    "tier_limits_for",
]
