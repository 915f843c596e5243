"""Catalog domain models."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core.config import Category


def to_number(value: Any) -> Optional[float]:
    """Coerce a stored value to a number, or None when it is not numeric."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass
class CatalogItem:
    """Fields shared by every media item."""

    id: str
    title: str
    cover: Optional[str] = None
    rating: Optional[float] = None
    year: Optional[int] = None
    country: Optional[str] = None
    added_date: Optional[str] = None
    notes: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    # Record keys handled by the dataclass fields of each variant
    RECORD_KEYS = ("id", "title", "cover", "rating", "year", "country", "addedDate", "notes")

    @property
    def creator(self) -> Optional[str]:
        """Person or group credited for the item."""
        return None

    @property
    def rating_str(self) -> str:
        """Rating without a trailing '.0'."""
        if self.rating is None:
            return ""
        return f"{self.rating:g}"

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "CatalogItem":
        """Build an item from a stored JSON record, keeping unknown keys in extra."""
        year = to_number(record.get("year"))
        kwargs = {
            "id": str(record.get("id") or ""),
            "title": str(record.get("title") or ""),
            "cover": record.get("cover") or None,
            "rating": to_number(record.get("rating")),
            "year": int(year) if year is not None else None,
            "country": record.get("country") or None,
            "added_date": record.get("addedDate") or None,
            "notes": record.get("notes") or None,
        }
        for key in cls.variant_keys():
            kwargs[key] = record.get(key) or None
        known = set(cls.RECORD_KEYS) | set(cls.variant_keys()) | {"type"}
        kwargs["extra"] = {k: v for k, v in record.items() if k not in known}
        return cls(**kwargs)

    @classmethod
    def variant_keys(cls) -> List[str]:
        return []


@dataclass
class Book(CatalogItem):
    """A book in the library."""

    author: Optional[str] = None
    status: Optional[str] = None
    publisher: Optional[str] = None
    platform: Optional[str] = None

    @property
    def creator(self) -> Optional[str]:
        return self.author

    @classmethod
    def variant_keys(cls) -> List[str]:
        return ["author", "status", "publisher", "platform"]


@dataclass
class Album(CatalogItem):
    """A music album in the concert hall."""

    artist: Optional[str] = None
    genre: Optional[str] = None

    @property
    def creator(self) -> Optional[str]:
        return self.artist

    @classmethod
    def variant_keys(cls) -> List[str]:
        return ["artist", "genre"]


@dataclass
class Movie(CatalogItem):
    """A film in the cinema."""

    director: Optional[str] = None
    status: Optional[str] = None
    genre: Optional[str] = None
    type: str = "movie"

    @property
    def creator(self) -> Optional[str]:
        return self.director

    @classmethod
    def variant_keys(cls) -> List[str]:
        return ["director", "status", "genre"]


@dataclass
class Series(Movie):
    """A TV series in the cinema."""

    type: str = "series"


ITEM_TYPES = {
    Category.BOOKS: Book,
    Category.MOVIES: Movie,
    Category.SERIES: Series,
    Category.MUSIC: Album,
}


def item_from_record(category: Category, record: Dict[str, Any]) -> CatalogItem:
    """Build the category's item variant from a stored record."""
    return ITEM_TYPES[category].from_record(record)


@dataclass
class ValidationResult:
    """Outcome of validating one record against its category schema."""

    errors: List[str] = field(default_factory=list)
    unknown_fields: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True when no rule was violated."""
        return not self.errors
