from mediashelf.catalog.schema import (
    check_date,
    check_number,
    check_url,
    validate_item,
)
from mediashelf.core.config import Category


def test_movie_without_cover_reports_cover_required():
    result = validate_item("movies", {"title": "X"})

    assert not result.is_valid
    assert "cover is required" in result.errors


def test_all_violations_are_reported():
    result = validate_item(
        Category.MUSIC, {"title": "", "year": "abc", "rating": 0, "addedDate": "soon"}
    )

    assert result.errors == [
        "title is required",
        "artist is required",
        "cover is required",
        "year must be a number",
        "addedDate must be a valid date (YYYY-MM-DD)",
        "rating must be at least 1",
    ]


def test_rating_bounds_are_inclusive():
    for category in Category:
        record = {"title": "T", "author": "A", "artist": "A", "cover": "/c.jpg"}
        assert not validate_item(category, {**record, "rating": 11}).is_valid
        assert validate_item(category, {**record, "rating": 10}).is_valid
        assert validate_item(category, {**record, "rating": 1}).is_valid


def test_numeric_strings_are_coerced():
    assert check_number("2001", "year", 1000, 2100) is None
    assert check_number("999", "year", 1000, 2100) == "year must be at least 1000"
    assert check_number(2101, "year", 1000, 2100) == "year must be at most 2100"
    assert check_number("nan", "year", 1000, 2100) == "year must be a number"
    assert check_number(True, "rating", 1, 10) == "rating must be a number"


def test_string_rule_rejects_non_text():
    result = validate_item("books", {"title": "T", "author": "A", "notes": 42})

    assert result.errors == ["notes must be a string"]


def test_url_rule():
    assert check_url("", "cover") is None
    assert check_url("/covers/a.jpg", "cover") is None
    assert check_url("https://img.example.com/a.jpg", "cover") is None
    assert check_url("ftp://example.com/a.jpg", "cover") is None
    assert check_url("covers/a.jpg", "cover") == "cover must be a valid URL or path"
    assert check_url("https://", "cover") == "cover must be a valid URL or path"


def test_date_rule():
    assert check_date(None, "addedDate") is None
    assert check_date("2023-05-01", "addedDate") is None
    assert check_date("2023-05-01T10:00:00", "addedDate") is None
    assert check_date("2023-02-30", "addedDate") is not None
    assert check_date("yesterday", "addedDate") is not None


def test_status_enum_depends_on_category():
    book = {"title": "T", "author": "A"}
    movie = {"title": "T", "cover": "/c.jpg"}

    assert validate_item("books", {**book, "status": "want-to-read"}).is_valid
    assert not validate_item("books", {**book, "status": "watching"}).is_valid
    assert validate_item("series", {**movie, "status": "watching"}).is_valid

    result = validate_item("movies", {**movie, "status": "reading"})
    assert result.errors == ["status must be one of: watching, completed, want-to-watch"]


def test_unknown_fields_are_tolerated_and_reported():
    result = validate_item("books", {"id": "book-1", "title": "T", "author": "A", "isbn": "123"})

    assert result.is_valid
    assert result.unknown_fields == ["isbn"]


def test_unknown_category_is_invalid():
    result = validate_item("games", {"title": "T"})

    assert not result.is_valid
    assert result.errors == ["Unknown data type: games"]


def test_validation_does_not_mutate_record():
    record = {"title": "T", "author": "A", "rating": "7"}
    validate_item("books", record)

    assert record == {"title": "T", "author": "A", "rating": "7"}
