"""
Directory filtering and ranking.

Everything here is a pure function over profile snapshots: the input list is
never mutated and the same inputs always give the same ordered output.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, List, Mapping, Optional, Tuple

from core.profiles.models import (
    Availability,
    OpenTo,
    Profile,
    parse_availability,
    parse_open_to,
)

ALL = "all"

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class SortBy(str, Enum):
    FEATURED = "featured"
    RECENT = "recent"


@dataclass(frozen=True)
class FilterSpec:
    search: str = ""
    availability: Optional[Availability | str] = None  # None or "all" means any status
    open_to: Tuple[OpenTo, ...] = ()
    location: Optional[str] = None
    skill: Optional[str] = None
    sort_by: SortBy = SortBy.FEATURED


DEFAULT_FILTER_SPEC = FilterSpec()


def _is_unset(value: Optional[str]) -> bool:
    return value is None or value == "" or value == ALL


def matches_search(profile: Profile, term: str) -> bool:
    """
    Case-insensitive substring match against name, role, location and skills.
    An empty term matches every profile.
    """
    needle = (term or "").strip().lower()
    if not needle:
        return True
    fields = [profile.name or "", profile.role or "", profile.location or ""]
    fields.extend(profile.skills or ())
    return any(needle in field.lower() for field in fields)


def matches_availability(profile: Profile, availability: Optional[Availability | str]) -> bool:
    """None, "" and "all" match every profile; a status string is read as its Availability."""
    if _is_unset(availability):
        return True
    wanted = parse_availability(availability)
    return wanted is not None and profile.availability == wanted


def matches_open_to(profile: Profile, wanted: Iterable[OpenTo]) -> bool:
    """OR semantics: any selected tag is enough. No selection matches everything."""
    wanted = tuple(wanted or ())
    if not wanted:
        return True
    have = set(profile.open_to or ())
    return any(tag in have for tag in wanted)


def matches_location(profile: Profile, location: Optional[str]) -> bool:
    if _is_unset(location):
        return True
    return (profile.location or "") == location


def matches_skill(profile: Profile, skill: Optional[str]) -> bool:
    if _is_unset(skill):
        return True
    return skill in (profile.skills or ())


def profile_matches(profile: Profile, spec: FilterSpec) -> bool:
    """A profile must satisfy every filter dimension."""
    return (
        matches_search(profile, spec.search)
        and matches_availability(profile, spec.availability)
        and matches_open_to(profile, spec.open_to)
        and matches_location(profile, spec.location)
        and matches_skill(profile, spec.skill)
    )


def _activity_key(profile: Profile) -> datetime:
    stamp = profile.last_active or _OLDEST
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp


def sort_profiles(profiles: Iterable[Profile], sort_by: SortBy) -> List[Profile]:
    """
    Stable sort.
    - featured: featured profiles first, input order kept within each group
    - recent: most recently active first; undated profiles last
    """
    if sort_by == SortBy.RECENT:
        # sorted() keeps equal keys in input order even with reverse=True
        return sorted(profiles, key=_activity_key, reverse=True)
    return sorted(profiles, key=lambda p: not p.featured)


def filter_profiles(profiles: Iterable[Profile], spec: FilterSpec) -> List[Profile]:
    """Return a new list of the profiles matching `spec`, in `spec.sort_by` order."""
    matched = [p for p in profiles or () if profile_matches(p, spec)]
    return sort_profiles(matched, spec.sort_by)


def active_filter_count(spec: FilterSpec) -> int:
    """Number of filter dimensions currently narrowing the result (sort excluded)."""
    count = 0
    if (spec.search or "").strip():
        count += 1
    if not _is_unset(spec.availability):
        count += 1
    if spec.open_to:
        count += 1
    if not _is_unset(spec.location):
        count += 1
    if not _is_unset(spec.skill):
        count += 1
    return count


def location_options(profiles: Iterable[Profile]) -> List[str]:
    """Distinct non-empty locations, sorted, for the exact-match dropdown."""
    return sorted({p.location.strip() for p in profiles or () if (p.location or "").strip()})


def skill_options(profiles: Iterable[Profile]) -> List[str]:
    skills = set()
    for p in profiles or ():
        skills.update(s for s in (p.skills or ()) if s.strip())
    return sorted(skills, key=str.lower)


def _first(params: Mapping, key: str):
    value = params.get(key)
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def filter_spec_from_params(params: Mapping) -> FilterSpec:
    """
    Build a FilterSpec from query-string style values.

    `open_to` may be a list or a comma separated string. Unknown availability,
    sort or open-to values fall back to "no filtering" instead of erroring.
    """
    raw_open_to = params.get("open_to") or ()
    if isinstance(raw_open_to, str):
        raw_open_to = [part for part in raw_open_to.split(",") if part.strip()]
    else:
        expanded = []
        for item in raw_open_to:
            expanded.extend(part for part in str(item).split(",") if part.strip())
        raw_open_to = expanded

    try:
        sort_by = SortBy((_first(params, "sort_by") or SortBy.FEATURED.value).strip().lower())
    except ValueError:
        sort_by = SortBy.FEATURED

    location = (_first(params, "location") or "").strip()
    skill = (_first(params, "skill") or "").strip()

    return FilterSpec(
        search=(_first(params, "search") or "").strip(),
        availability=parse_availability(_first(params, "availability")),
        open_to=parse_open_to(raw_open_to),
        location=None if _is_unset(location) else location,
        skill=None if _is_unset(skill) else skill,
        sort_by=sort_by,
    )


__all__ = [
    "ALL",
    "SortBy",
    "FilterSpec",
    "DEFAULT_FILTER_SPEC",
    "matches_search",
    "matches_availability",
    "matches_open_to",
    "matches_location",
    "matches_skill",
    "profile_matches",
    "sort_profiles",
    "filter_profiles",
    "active_filter_count",
    "location_options",
    "skill_options",
    "filter_spec_from_params",
]
