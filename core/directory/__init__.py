"""
Directory filtering re-exports.
"""
from core.directory.filtering import (
    ALL,
    DEFAULT_FILTER_SPEC,
    FilterSpec,
    SortBy,
    active_filter_count,
    filter_profiles,
    filter_spec_from_params,
    location_options,
    profile_matches,
    skill_options,
    sort_profiles,
)

__all__ = [
    "ALL",
    "DEFAULT_FILTER_SPEC",
    "FilterSpec",
    "SortBy",
    "active_filter_count",
    "filter_profiles",
    "filter_spec_from_params",
    "location_options",
    "profile_matches",
    "skill_options",
    "sort_profiles",
]
