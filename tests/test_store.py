import json
from datetime import date

import pytest

from conftest import read_collection, write_collection
from mediashelf.catalog.store import CatalogStore, parse_payload
from mediashelf.core.exceptions import (
    MalformedPayloadError,
    NotFoundError,
    StorageError,
    UnknownCategoryError,
    ValidationError,
)


@pytest.fixture
def store(data_dir):
    return CatalogStore(data_dir)


def test_read_all_and_get(store):
    assert [item["id"] for item in store.read_all("books")] == ["book-2", "book-1"]
    assert store.get("books", "book-1")["title"] == "Dune"


def test_get_missing_raises_not_found(store):
    with pytest.raises(NotFoundError) as exc_info:
        store.get("books", "book-99")

    assert exc_info.value.message == "Item not found"


def test_missing_file_reads_as_empty(store):
    assert store.read_all("music") == []


def test_unknown_category(store):
    with pytest.raises(UnknownCategoryError):
        store.read_all("games")


def test_corrupt_file_raises_storage_error(store, data_dir):
    (data_dir / "series.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(StorageError):
        store.read_all("series")


def test_non_array_file_raises_storage_error(store, data_dir):
    (data_dir / "series.json").write_text('{"id": "series-1"}', encoding="utf-8")

    with pytest.raises(StorageError):
        store.read_all("series")


def test_create_assigns_id_and_added_date_and_prepends(store, data_dir):
    created = store.create("books", {"title": "T", "author": "A"})

    assert created["id"] == "book-3"
    assert created["addedDate"] == date.today().isoformat()
    assert read_collection(data_dir, "books")[0] == created


def test_create_keeps_given_added_date_and_drops_client_id(store):
    created = store.create(
        "books", {"id": "book-1", "title": "T", "author": "A", "addedDate": "2020-01-01"}
    )

    assert created["id"] == "book-3"
    assert created["addedDate"] == "2020-01-01"


def test_create_in_empty_category_starts_at_one(store, data_dir):
    created = store.create("music", {"title": "T", "artist": "A", "cover": "/c.jpg"})

    assert created["id"] == "music-1"
    assert read_collection(data_dir, "music") == [created]


def test_create_rejects_invalid_payload_without_writing(store, data_dir):
    before = read_collection(data_dir, "movies")

    with pytest.raises(ValidationError) as exc_info:
        store.create("movies", {"title": "X", "rating": 11})

    assert exc_info.value.errors == ["cover is required", "rating must be at most 10"]
    assert read_collection(data_dir, "movies") == before


def test_ids_are_not_reused_after_delete(store):
    created = store.create("books", {"title": "T", "author": "A"})
    store.delete("books", created["id"])

    assert store.create("books", {"title": "U", "author": "B"})["id"] == "book-4"


def test_update_merges_and_keeps_id(store):
    updated = store.update("books", "book-1", {"id": "book-9", "title": "Dune Messiah", "author": "F"})

    assert updated["id"] == "book-1"
    assert updated["title"] == "Dune Messiah"
    assert updated["year"] == 1965
    assert store.get("books", "book-1") == updated


def test_update_missing_raises_not_found(store):
    with pytest.raises(NotFoundError):
        store.update("books", "book-99", {"title": "T", "author": "A"})


def test_update_validates_before_lookup(store):
    with pytest.raises(ValidationError):
        store.update("books", "book-99", {"title": "T"})


def test_delete_returns_removed_record(store, data_dir):
    deleted = store.delete("books", "book-2")

    assert deleted["title"] == "三体"
    assert [item["id"] for item in read_collection(data_dir, "books")] == ["book-1"]


def test_delete_missing_raises_not_found(store):
    with pytest.raises(NotFoundError):
        store.delete("books", "book-99")


def test_file_is_pretty_printed_utf8(store, data_dir):
    store.create("books", {"title": "活着", "author": "余华"})
    text = (data_dir / "books.json").read_text(encoding="utf-8")

    assert "活着" in text
    assert text.startswith('[\n  {\n    "id": "book-3"')
    assert json.loads(text)[0]["author"] == "余华"


def test_unknown_fields_are_stored(store):
    created = store.create("books", {"title": "T", "author": "A", "isbn": "978"})

    assert store.get("books", created["id"])["isbn"] == "978"


def test_overlapping_writers_lose_updates(tmp_path, monkeypatch):
    # No locking: a writer working from a stale read overwrites the other
    # writer's record. Last writer wins.
    write_collection(tmp_path, "books", [])
    first, second = CatalogStore(tmp_path), CatalogStore(tmp_path)
    stale = first.read_all("books")
    monkeypatch.setattr(first, "read_all", lambda category: list(stale))

    second.create("books", {"title": "B", "author": "A"})
    first.create("books", {"title": "A", "author": "A"})

    assert [item["title"] for item in read_collection(tmp_path, "books")] == ["A"]


@pytest.mark.parametrize("raw", ['{"score": NaN}', '{"score": Infinity}', '{"score": -Infinity}'])
def test_parse_payload_rejects_non_finite_constants(raw):
    with pytest.raises(MalformedPayloadError) as exc_info:
        parse_payload(raw)

    assert exc_info.value.message == "Invalid JSON"


def test_parse_payload_requires_an_object():
    assert parse_payload(b'{"title": "T"}') == {"title": "T"}
    with pytest.raises(MalformedPayloadError):
        parse_payload("[1, 2]")


def test_non_finite_number_is_never_written(store, data_dir):
    before = (data_dir / "books.json").read_text(encoding="utf-8")

    with pytest.raises(StorageError):
        store.create("books", {"title": "T", "author": "A", "score": float("nan")})

    assert (data_dir / "books.json").read_text(encoding="utf-8") == before
