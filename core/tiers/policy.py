"""
Tier limits and the profile-edit gate.

The editor consults these helpers before anything is sent to the store, so a
saved profile never carries more skills, portfolio links or bio text than its
tier allows.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from core.profiles.models import (
    Availability,
    OpenTo,
    Profile,
    Tier,
    UnknownTierError,
    parse_availability,
    parse_open_to,
    parse_tier,
)


@dataclass(frozen=True)
class TierLimits:
    """Per-tier caps. None means no limit."""

    skills: Optional[int]
    bio_length: int
    portfolio_links: Optional[int]
    expires_after_days: Optional[int]


TIER_LIMITS: Dict[Tier, TierLimits] = {
    Tier.FREE: TierLimits(skills=1, bio_length=200, portfolio_links=0, expires_after_days=60),
    Tier.PRO: TierLimits(skills=None, bio_length=500, portfolio_links=3, expires_after_days=None),
    Tier.PREMIUM: TierLimits(skills=None, bio_length=500, portfolio_links=None, expires_after_days=None),
}

_missing = [t.value for t in Tier if t not in TIER_LIMITS]
if _missing:
    raise RuntimeError(f"TIER_LIMITS has no entry for tier(s): {', '.join(_missing)}")


class ProfileEditError(ValueError):
    """A submitted profile edit cannot be saved as-is."""


def tier_limits_for(tier) -> TierLimits:
    """Return the limits for `tier` (Tier or string). Unknown values raise UnknownTierError."""
    return TIER_LIMITS[parse_tier(tier)]


def format_limit(value: Optional[int]) -> str:
    return "∞" if value is None else str(value)


def _has_room(count: int, limit: Optional[int]) -> bool:
    return limit is None or count < limit


def can_add_skill(current_skills: Sequence[str] | None, tier, candidate: Optional[str] = None) -> bool:
    """
    True when one more skill fits the tier's cap. With a candidate, it must also be
    non-blank and not already listed (exact, case-sensitive match).
    """
    current = list(current_skills or ())
    if not _has_room(len(current), tier_limits_for(tier).skills):
        return False
    if candidate is not None:
        candidate = candidate.strip()
        if not candidate or candidate in current:
            return False
    return True


def can_add_portfolio_link(current_links: Sequence[str] | None, tier, candidate: Optional[str] = None) -> bool:
    """Count check only; the same link may appear more than once."""
    current = list(current_links or ())
    if not _has_room(len(current), tier_limits_for(tier).portfolio_links):
        return False
    if candidate is not None and not candidate.strip():
        return False
    return True


def clamp_bio(text: Optional[str], tier) -> str:
    """Truncate the bio to the tier's bio_length."""
    return (text or "")[: tier_limits_for(tier).bio_length]


def _as_utc(moment: datetime) -> datetime:
    return moment.replace(tzinfo=timezone.utc) if moment.tzinfo is None else moment


def is_expired(profile: Profile, tier=None, now: Optional[datetime] = None) -> bool:
    """
    True when the tier expires listings and the profile has been inactive for longer
    than `expires_after_days`. Falls back to created_at when last_active is missing;
    a profile with neither never expires.
    """
    limits = tier_limits_for(profile.tier if tier is None else tier)
    if limits.expires_after_days is None:
        return False
    seen = profile.last_active or profile.created_at
    if seen is None:
        return False
    now = _as_utc(now or datetime.now(timezone.utc))
    return now - _as_utc(seen) > timedelta(days=limits.expires_after_days)


def days_until_expiry(profile: Profile, now: Optional[datetime] = None) -> Optional[int]:
    """Whole days left before the listing expires (0 once expired); None if it never expires."""
    limits = tier_limits_for(profile.tier)
    seen = profile.last_active or profile.created_at
    if limits.expires_after_days is None or seen is None:
        return None
    now = _as_utc(now or datetime.now(timezone.utc))
    remaining = _as_utc(seen) + timedelta(days=limits.expires_after_days) - now
    return max(0, remaining.days)


@dataclass(frozen=True)
class ProfileEdit:
    """Editable profile fields, already checked against a tier."""

    name: str = ""
    role: str = ""
    location: str = ""
    bio: str = ""
    availability: Availability = Availability.AVAILABLE
    open_to: Tuple[OpenTo, ...] = ()
    skills: Tuple[str, ...] = ()
    contact_email: Optional[str] = None
    twitter: Optional[str] = None
    telegram: Optional[str] = None
    calendar_link: Optional[str] = None
    portfolio_links: Tuple[str, ...] = ()


def _split_lines(value, commas: bool = False) -> List[str]:
    """Accept a list or a newline separated string (optionally commas too)."""
    if value is None:
        return []
    if isinstance(value, str):
        if commas:
            value = value.replace(",", "\n")
        parts = value.splitlines()
    else:
        parts = [str(v) for v in value]
    return [p.strip() for p in parts if p and p.strip()]


def _optional(value) -> Optional[str]:
    value = (value or "").strip() if isinstance(value, str) else ""
    return value or None


def sanitize_profile_edit(form: Mapping, tier) -> Tuple[ProfileEdit, List[str]]:
    """
    Validate a candidate edit for `tier` and return (edit, notices).

    Skills and links are admitted one by one through the same gates the editor
    buttons use, so the result always fits the tier. Notices describe anything
    that was dropped. An availability outside the three states raises
    ProfileEditError; an unknown tier raises UnknownTierError.
    """
    tier = parse_tier(tier)
    limits = TIER_LIMITS[tier]
    notices: List[str] = []

    raw_availability = form.get("availability") or Availability.AVAILABLE.value
    availability = parse_availability(raw_availability)
    if availability is None:
        raise ProfileEditError(f"Unknown availability: {raw_availability!r}")

    raw_bio = form.get("bio") or ""
    bio = clamp_bio(raw_bio.strip(), tier)
    if len(raw_bio.strip()) > len(bio):
        notices.append(f"Bio was shortened to {limits.bio_length} characters on the {tier.value} plan.")

    skills: List[str] = []
    dropped_skills = 0
    for skill in _split_lines(form.get("skills"), commas=True):
        if skill in skills:
            continue
        if can_add_skill(skills, tier, skill):
            skills.append(skill)
        else:
            dropped_skills += 1
    if dropped_skills:
        notices.append(
            f"{dropped_skills} skill(s) not saved: the {tier.value} plan allows "
            f"{format_limit(limits.skills)}."
        )

    links: List[str] = []
    dropped_links = 0
    for link in _split_lines(form.get("portfolio_links")):
        if can_add_portfolio_link(links, tier, link):
            links.append(link)
        else:
            dropped_links += 1
    if dropped_links:
        if limits.portfolio_links == 0:
            notices.append("Upgrade to Pro to add portfolio links.")
        else:
            notices.append(
                f"{dropped_links} portfolio link(s) not saved: the {tier.value} plan allows "
                f"{format_limit(limits.portfolio_links)}."
            )

    edit = ProfileEdit(
        name=(form.get("name") or "").strip(),
        role=(form.get("role") or "").strip(),
        location=(form.get("location") or "").strip(),
        bio=bio,
        availability=availability,
        open_to=parse_open_to(form.get("open_to")),
        skills=tuple(skills),
        contact_email=_optional(form.get("contact_email")),
        twitter=_optional(form.get("twitter")),
        telegram=_optional(form.get("telegram")),
        calendar_link=_optional(form.get("calendar_link")),
        portfolio_links=tuple(links),
    )
    return edit, notices


__all__ = [
    "TierLimits",
    "TIER_LIMITS",
    "UnknownTierError",
    "ProfileEditError",
    "ProfileEdit",
    "tier_limits_for",
    "format_limit",
    "can_add_skill",
    "can_add_portfolio_link",
    "clamp_bio",
    "is_expired",
    "days_until_expiry",
    "sanitize_profile_edit",
]
