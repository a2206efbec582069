from conftest import make_profile
from core.directory import (
    DEFAULT_FILTER_SPEC,
    FilterSpec,
    SortBy,
    active_filter_count,
    filter_spec_from_params,
    location_options,
    skill_options,
)
from core.profiles.models import Availability, OpenTo


def test_params_build_a_full_spec():
    spec = filter_spec_from_params(
        {
            "search": "  rust ",
            "availability": "open",
            "open_to": ["freelance", "equity"],
            "location": "London",
            "skill": "Rust",
            "sort_by": "recent",
        }
    )
    assert spec == FilterSpec(
        search="rust",
        availability=Availability.OPEN,
        open_to=(OpenTo.FREELANCE, OpenTo.EQUITY),
        location="London",
        skill="Rust",
        sort_by=SortBy.RECENT,
    )


def test_empty_params_give_default_spec():
    assert filter_spec_from_params({}) == DEFAULT_FILTER_SPEC


def test_unknown_values_fall_back_to_no_filtering():
    spec = filter_spec_from_params(
        {"availability": "busy", "sort_by": "alphabetical", "open_to": "freelance,astronaut", "location": "all"}
    )
    assert spec.availability is None
    assert spec.sort_by == SortBy.FEATURED
    assert spec.open_to == (OpenTo.FREELANCE,)
    assert spec.location is None


def test_open_to_accepts_comma_lists_and_drops_duplicates():
    spec = filter_spec_from_params({"open_to": ["advising,fulltime", "advising"]})
    assert spec.open_to == (OpenTo.ADVISING, OpenTo.FULLTIME)


def test_active_filter_count():
    assert active_filter_count(DEFAULT_FILTER_SPEC) == 0
    assert active_filter_count(FilterSpec(sort_by=SortBy.RECENT)) == 0
    assert active_filter_count(FilterSpec(search="   ")) == 0
    spec = FilterSpec(
        search="a",
        availability=Availability.AVAILABLE,
        open_to=(OpenTo.EQUITY,),
        location="London",
        skill="Rust",
    )
    assert active_filter_count(spec) == 5


def test_dropdown_options_are_distinct_and_sorted():
    profiles = [
        make_profile("a", location="London", skills=("rust", "Go")),
        make_profile("b", location="Berlin", skills=("Go",)),
        make_profile("c", location="", skills=()),
        make_profile("d", location="London", skills=("Assembly",)),
    ]
    assert location_options(profiles) == ["Berlin", "London"]
    assert skill_options(profiles) == ["Assembly", "Go", "rust"]


def test_all_availability_is_not_an_active_filter():
    assert active_filter_count(FilterSpec(availability="all")) == 0
    assert active_filter_count(FilterSpec(availability="open")) == 1
