"""Shared fixtures: a temporary data directory seeded with small collections."""

import json

import pytest

BOOKS = [
    {
        "id": "book-2",
        "title": "三体",
        "author": "刘慈欣",
        "country": "中国",
        "year": 2008,
        "status": "completed",
        "rating": 9,
        "addedDate": "2024-03-01",
    },
    {
        "id": "book-1",
        "title": "Dune",
        "author": "Frank Herbert",
        "country": "美国",
        "year": 1965,
        "status": "reading",
        "addedDate": "2023-05-01",
    },
]

MOVIES = [
    {
        "id": "movie-1",
        "title": "Notting Hill",
        "director": "Roger Michell",
        "country": "美国 / 英国",
        "year": 1999,
        "status": "completed",
        "cover": "/covers/notting-hill.jpg",
        "rating": 8,
        "addedDate": "2023-07-12",
    }
]


def write_collection(data_dir, category, items):
    path = data_dir / f"{category}.json"
    path.write_text(json.dumps(items, ensure_ascii=False, indent=2), encoding="utf-8")
    return path


def read_collection(data_dir, category):
    return json.loads((data_dir / f"{category}.json").read_text(encoding="utf-8"))


@pytest.fixture
def data_dir(tmp_path):
    write_collection(tmp_path, "books", BOOKS)
    write_collection(tmp_path, "movies", MOVIES)
    return tmp_path
