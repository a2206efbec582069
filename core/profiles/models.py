"""
Profile snapshot model and row conversion.

Profiles are owned by the managed backend; this module only turns the rows it
hands back into immutable snapshots the directory and tier helpers can read.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple


class Availability(str, Enum):
    AVAILABLE = "available"
    OPEN = "open"
    UNAVAILABLE = "unavailable"


class OpenTo(str, Enum):
    FREELANCE = "freelance"
    EQUITY = "equity"
    COFOUNDING = "cofounding"
    ADVISING = "advising"
    SIDEPROJECTS = "sideprojects"
    FULLTIME = "fulltime"


class Tier(str, Enum):
    FREE = "free"
    PRO = "pro"
    PREMIUM = "premium"


AVAILABILITY_LABELS: Dict[Availability, str] = {
    Availability.AVAILABLE: "Available now",
    Availability.OPEN: "Open to conversations",
    Availability.UNAVAILABLE: "Not available",
}

OPEN_TO_LABELS: Dict[OpenTo, str] = {
    OpenTo.FREELANCE: "Freelance Work",
    OpenTo.EQUITY: "Equity Opportunities",
    OpenTo.COFOUNDING: "Co-founding",
    OpenTo.ADVISING: "Advising",
    OpenTo.SIDEPROJECTS: "Side Projects",
    OpenTo.FULLTIME: "Full-time Roles",
}


class UnknownTierError(ValueError):
    """Raised when a tier value is outside the fixed enumeration."""

    def __init__(self, value):
        super().__init__(f"Unknown subscription tier: {value!r}")
        self.value = value


def parse_tier(value) -> Tier:
    """Return the Tier for `value` (a Tier or its string value) or raise UnknownTierError."""
    if isinstance(value, Tier):
        return value
    if isinstance(value, str):
        try:
            return Tier(value.strip().lower())
        except ValueError:
            pass
    raise UnknownTierError(value)


def parse_availability(value) -> Optional[Availability]:
    if isinstance(value, Availability):
        return value
    try:
        return Availability((value or "").strip().lower())
    except (ValueError, AttributeError):
        return None


def parse_open_to(values: Iterable | None) -> Tuple[OpenTo, ...]:
    """Keep known open-to tags, in order, without duplicates."""
    tags = []
    for raw in values or ():
        try:
            tag = raw if isinstance(raw, OpenTo) else OpenTo(str(raw).strip().lower())
        except ValueError:
            continue
        if tag not in tags:
            tags.append(tag)
    return tuple(tags)


def parse_timestamp(value) -> Optional[datetime]:
    """Parse an ISO timestamp (or datetime) into an aware UTC datetime; None if unusable."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _text(value) -> str:
    return value if isinstance(value, str) else ""


def _optional_text(value) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _count(value) -> int:
    try:
        return max(0, int(value or 0))
    except (TypeError, ValueError):
        return 0


def _strings(values) -> Tuple[str, ...]:
    if not values or isinstance(values, str):
        return ()
    return tuple(v for v in values if isinstance(v, str))


@dataclass(frozen=True)
class Profile:
    id: str
    user_id: Optional[str] = None
    name: str = ""
    email: str = ""
    role: str = ""
    location: str = ""
    bio: str = ""
    avatar: str = ""
    availability: Optional[Availability] = None
    open_to: Tuple[OpenTo, ...] = ()
    skills: Tuple[str, ...] = ()
    contact_email: Optional[str] = None
    twitter: Optional[str] = None
    telegram: Optional[str] = None
    calendar_link: Optional[str] = None
    portfolio_links: Tuple[str, ...] = ()
    tier: Tier = Tier.FREE
    featured: bool = False
    profile_views: int = 0
    contact_clicks: int = 0
    created_at: Optional[datetime] = None
    last_active: Optional[datetime] = None

    @property
    def has_contact_method(self) -> bool:
        return any([self.contact_email, self.twitter, self.telegram, self.calendar_link])


def profile_from_row(row: Dict) -> Profile:
    """
    Convert a `profiles` row (snake_case columns) into a Profile snapshot.

    Missing arrays become empty tuples and missing strings become "", so callers
    never need to guard optional columns. A missing tier is read as free; an
    unknown tier string raises UnknownTierError.
    """
    raw_tier = row.get("tier")
    tier = Tier.FREE if raw_tier in (None, "") else parse_tier(raw_tier)

    return Profile(
        id=str(row.get("id") or ""),
        user_id=str(row["user_id"]) if row.get("user_id") is not None else None,
        name=_text(row.get("name")),
        email=_text(row.get("email")),
        role=_text(row.get("role")),
        location=_text(row.get("location")),
        bio=_text(row.get("bio")),
        avatar=_text(row.get("avatar")),
        availability=parse_availability(row.get("availability")),
        open_to=parse_open_to(row.get("open_to")),
        skills=_strings(row.get("skills")),
        contact_email=_optional_text(row.get("contact_email")),
        twitter=_optional_text(row.get("twitter")),
        telegram=_optional_text(row.get("telegram")),
        calendar_link=_optional_text(row.get("calendar_link")),
        portfolio_links=_strings(row.get("portfolio_links")),
        tier=tier,
        featured=bool(row.get("featured")),
        profile_views=_count(row.get("profile_views")),
        contact_clicks=_count(row.get("contact_clicks")),
        created_at=parse_timestamp(row.get("created_at")),
        last_active=parse_timestamp(row.get("last_active")),
    )


__all__ = [
    "Availability",
    "OpenTo",
    "Tier",
    "AVAILABILITY_LABELS",
    "OPEN_TO_LABELS",
    "UnknownTierError",
    "parse_tier",
    "parse_availability",
    "parse_open_to",
    "parse_timestamp",
    "Profile",
    "profile_from_row",
]
