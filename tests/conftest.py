from datetime import datetime, timedelta, timezone

import pytest

from app import security
from app.session import SessionContext
from core.profiles.models import Availability, OpenTo, Profile, Tier

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_profile(id="p1", **fields) -> Profile:
    """Profile snapshot with sensible defaults; override any field by keyword."""
    defaults = {
        "user_id": f"u-{id}",
        "name": "Test Person",
        "role": "Engineer",
        "location": "Berlin",
        "availability": Availability.AVAILABLE,
        "tier": Tier.FREE,
        "last_active": NOW - timedelta(days=1),
        "created_at": NOW - timedelta(days=30),
    }
    defaults.update(fields)
    return Profile(id=id, **defaults)


def make_session(profile: Profile) -> SessionContext:
    return SessionContext.for_profile(profile.user_id, profile)


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    security.reset_rate_limits()
    yield
    security.reset_rate_limits()


@pytest.fixture
def sample_profiles():
    return [
        make_profile(
            "ada",
            name="Ada Lovelace",
            role="Mathematician",
            location="London",
            skills=("Rust", "Analysis"),
            open_to=(OpenTo.ADVISING,),
            last_active=NOW - timedelta(days=3),
        ),
        make_profile(
            "grace",
            name="Grace Hopper",
            role="Rear Admiral",
            location="Arlington",
            skills=("Cobol",),
            availability=Availability.OPEN,
            open_to=(OpenTo.FREELANCE, OpenTo.EQUITY),
            featured=True,
            tier=Tier.PRO,
            last_active=NOW - timedelta(days=1),
        ),
        make_profile(
            "linus",
            name="Linus T",
            role="Kernel Maintainer",
            location="Portland",
            skills=("C", "Git"),
            availability=Availability.UNAVAILABLE,
            open_to=(OpenTo.SIDEPROJECTS,),
            last_active=NOW - timedelta(days=10),
        ),
        make_profile(
            "margaret",
            name="Margaret Hamilton",
            role="Software Engineer",
            location="London",
            skills=("Assembly", "Rust"),
            open_to=(OpenTo.COFOUNDING, OpenTo.FREELANCE),
            featured=True,
            tier=Tier.PREMIUM,
            last_active=NOW - timedelta(days=2),
        ),
    ]
