"""
Profile snapshot re-exports.
"""
from core.profiles.models import (
    AVAILABILITY_LABELS,
    OPEN_TO_LABELS,
    Availability,
    OpenTo,
    Profile,
    Tier,
    UnknownTierError,
    parse_availability,
    parse_open_to,
    parse_tier,
    parse_timestamp,
    profile_from_row,
)
from core.profiles.completeness import missing_checks, profile_completeness

__all__ = [
    "AVAILABILITY_LABELS",
    "OPEN_TO_LABELS",
    "Availability",
    "OpenTo",
    "Profile",
    "Tier",
    "UnknownTierError",
    "parse_availability",
    "parse_open_to",
    "parse_tier",
    "parse_timestamp",
    "profile_from_row",
    "missing_checks",
    "profile_completeness",
]
