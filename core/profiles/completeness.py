"""
Profile completeness checklist shown on the owner dashboard.
"""
from __future__ import annotations

from typing import Callable, List, Tuple

from core.profiles.models import Profile

MIN_BIO_CHARS = 20

# (label, check) pairs; each satisfied check is worth the same share.
COMPLETENESS_CHECKS: List[Tuple[str, Callable[[Profile], bool]]] = [
    ("Add your name", lambda p: bool(p.name)),
    ("Add your role", lambda p: bool(p.role)),
    ("Add your location", lambda p: bool(p.location)),
    ("Write a bio (more than 20 characters)", lambda p: bool(p.bio) and len(p.bio) > MIN_BIO_CHARS),
    ("Upload a photo", lambda p: bool(p.avatar)),
    ("Add at least one skill", lambda p: len(p.skills or ()) > 0),
    ("Pick what you are open to", lambda p: len(p.open_to or ()) > 0),
    ("Add a contact email", lambda p: bool(p.contact_email)),
    ("Link a social handle", lambda p: bool(p.twitter) or bool(p.telegram)),
    ("Add a portfolio link", lambda p: len(p.portfolio_links or ()) > 0),
]


def profile_completeness(profile: Profile) -> int:
    """Return completeness as a whole percentage (0-100)."""
    satisfied = sum(1 for _label, check in COMPLETENESS_CHECKS if check(profile))
    return round(100 * satisfied / len(COMPLETENESS_CHECKS))


def missing_checks(profile: Profile) -> List[str]:
    """Labels of the checks the profile does not satisfy yet, in checklist order."""
    return [label for label, check in COMPLETENESS_CHECKS if not check(profile)]


__all__ = [
    "COMPLETENESS_CHECKS",
    "MIN_BIO_CHARS",
    "profile_completeness",
    "missing_checks",
]
