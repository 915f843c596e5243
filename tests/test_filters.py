from mediashelf.browse.filters import (
    extract_filter_options,
    extract_numeric_options,
    filter_items,
    get_added_year,
    matches_filter,
    matches_filters,
    split_by_slash,
)
from mediashelf.browse.models import FilterState

ITEMS = [
    {"title": "Notting Hill", "country": "美国 / 英国", "year": "1999", "addedDate": "2023-05-01"},
    {"title": "Amélie", "country": "法国", "year": "2001", "addedDate": "2024-01-09"},
    {"title": "Untitled", "year": "2001"},
]

FIELDS = {
    "country": lambda item: item.get("country"),
    "year": lambda item: item.get("year"),
    "added": lambda item: item.get("addedDate"),
}


def _state(**values):
    state = FilterState.for_dimensions(["country", "year", "added", "status"])
    for dimension, value in values.items():
        state.set(dimension, value)
    return state


def test_split_by_slash():
    assert split_by_slash("美国 / 英国") == ["美国", "英国"]
    assert split_by_slash("美国/英国/ 法国") == ["美国", "英国", "法国"]
    assert split_by_slash(" 日本 ") == ["日本"]
    assert split_by_slash("a / / b") == ["a", "b"]
    assert split_by_slash(None) == []
    assert split_by_slash("") == []


def test_get_added_year():
    assert get_added_year("2023-05-01") == "2023"
    assert get_added_year(None) == ""


def test_all_sentinel_matches_everything():
    assert matches_filter(None, "all")
    assert matches_filter("", "all")
    assert matches_filter("美国", "all")


def test_empty_item_value_never_matches():
    assert not matches_filter(None, "美国")
    assert not matches_filter("", "美国")


def test_contains_mode_compares_atoms_exactly():
    assert matches_filter("美国 / 英国", "英国")
    assert matches_filter("美国 / 英国", "美国")
    assert not matches_filter("美国 / 英国", "英")
    assert not matches_filter("美国 / 英国", "美国 / 英国 / 法国")


def test_exact_mode_does_not_split():
    assert matches_filter("美国 / 英国", "美国 / 英国", match_mode="exact")
    assert not matches_filter("美国 / 英国", "美国", match_mode="exact")


def test_all_dimensions_all_matches_every_item():
    state = _state()
    assert all(matches_filters(item, state, FIELDS) for item in ITEMS)


def test_one_failing_dimension_excludes_item():
    state = _state(country="英国", year="2001")

    assert filter_items(ITEMS, state, FIELDS) == []


def test_dimensions_are_combined_with_and():
    state = _state(country="英国", year="1999")

    assert filter_items(ITEMS, state, FIELDS) == [ITEMS[0]]


def test_added_dimension_compares_year_of_added_date():
    item = {"addedDate": "2023-05-01"}

    assert matches_filters(item, _state(added="2023"), FIELDS)
    assert not matches_filters(item, _state(added="2024"), FIELDS)
    assert not matches_filters(item, _state(added="2023-05"), FIELDS)


def test_dimension_without_accessor_is_ignored():
    state = _state(status="reading")

    assert filter_items(ITEMS, state, FIELDS) == ITEMS


def test_unknown_dimension_is_not_added_to_state():
    state = _state()

    assert not state.set("genre", "drama")
    assert "genre" not in state.dimensions


def test_empty_value_resets_dimension():
    state = _state(country="法国")
    state.set("country", "")

    assert state.get("country") == "all"
    assert state.active() == {}


def test_extract_filter_options_splits_and_deduplicates():
    options = extract_filter_options(ITEMS, FIELDS["country"])

    assert options == sorted(["美国", "英国", "法国"])


def test_extract_numeric_options_descending():
    values = [{"year": 1999}, {"year": 2001}, {}, {"year": 1999}]

    assert extract_numeric_options(values, lambda item: item.get("year")) == [2001, 1999]
