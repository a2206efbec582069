from conftest import make_profile
from core.profiles.completeness import COMPLETENESS_CHECKS, missing_checks, profile_completeness
from core.profiles.models import OpenTo, Profile


def test_empty_profile_is_zero_percent():
    bare = Profile(id="bare")
    assert profile_completeness(bare) == 0
    assert len(missing_checks(bare)) == len(COMPLETENESS_CHECKS) == 10


def test_full_profile_is_one_hundred_percent():
    full = make_profile(
        bio="I build analytical engines for a living.",
        avatar="https://img/ada.png",
        skills=("Rust",),
        open_to=(OpenTo.ADVISING,),
        contact_email="ada@example.com",
        telegram="@ada",
        portfolio_links=("https://ada.dev",),
    )
    assert profile_completeness(full) == 100
    assert missing_checks(full) == []


def test_short_bio_does_not_count():
    # name, role, location come from make_profile defaults
    profile = make_profile(bio="Too short")
    assert profile_completeness(profile) == 30
    assert "Write a bio (more than 20 characters)" in missing_checks(profile)


def test_completeness_grows_with_each_check():
    base = make_profile()
    more = make_profile(skills=("Go",))
    assert profile_completeness(more) > profile_completeness(base)
