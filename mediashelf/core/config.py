"""Configuration constants and settings for the media shelf."""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class Category(Enum):
    """Media categories, each backed by one JSON data file."""

    BOOKS = "books"
    MOVIES = "movies"
    SERIES = "series"
    MUSIC = "music"

    @property
    def filename(self) -> str:
        """Data file name for this category."""
        return f"{self.value}.json"

    @property
    def id_prefix(self) -> str:
        """Prefix used for generated identifiers."""
        if self is Category.BOOKS:
            return "book"
        elif self is Category.MOVIES:
            return "movie"
        elif self is Category.SERIES:
            return "series"
        else:
            return "music"

    @property
    def creator_field(self) -> str:
        """Name of the field holding the item's creator."""
        if self is Category.BOOKS:
            return "author"
        elif self is Category.MUSIC:
            return "artist"
        else:
            return "director"

    @classmethod
    def names(cls) -> list:
        return [category.value for category in cls]


class CatalogPage(Enum):
    """Catalog pages and the categories they display."""

    LIBRARY = "library"
    CINEMA = "cinema"
    CONCERT_HALL = "concert-hall"

    @classmethod
    def for_category(cls, category: Category) -> "CatalogPage":
        """Page that renders the given category."""
        if category is Category.BOOKS:
            return cls.LIBRARY
        elif category is Category.MUSIC:
            return cls.CONCERT_HALL
        else:
            return cls.CINEMA


class FilterConfig:
    """Filter dimensions and sort defaults for the catalog pages."""

    ALL = "all"
    DEFAULT_SORT = "added-desc"
    EPOCH_DATE = "1970-01-01"

    PAGE_DIMENSIONS = {
        CatalogPage.LIBRARY: ["year", "author", "country", "added", "status"],
        CatalogPage.CINEMA: ["year", "director", "country", "added", "status", "type"],
        CatalogPage.CONCERT_HALL: ["year", "artist", "country", "added"],
    }

    # Filter dimension -> record field
    DIMENSION_FIELDS = {
        "year": "year",
        "author": "author",
        "artist": "artist",
        "director": "director",
        "country": "country",
        "added": "addedDate",
        "status": "status",
        "type": "type",
    }

    @classmethod
    def dimensions_for(cls, category: Category) -> list:
        """Filter dimensions of the page that renders the category."""
        return list(cls.PAGE_DIMENSIONS[CatalogPage.for_category(category)])


class ValidationConfig:
    """Bounds and allowed values used by the schema validator."""

    YEAR_MIN = 1000
    YEAR_MAX = 2100
    RATING_MIN = 1
    RATING_MAX = 10

    BOOK_STATUSES = ["reading", "completed", "want-to-read"]
    WATCH_STATUSES = ["watching", "completed", "want-to-watch"]


class ServerConfig:
    """Admin API defaults."""

    DEFAULT_HOST = "localhost"
    DEFAULT_PORT = 4322
    DEFAULT_CORS_ORIGIN = "http://localhost:4321"
    DEV_ADMIN_KEY = "dev-key-change-in-production"
    ADMIN_KEY_HEADER = "X-Admin-Key"
    ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    ALLOWED_HEADERS = ["Content-Type", ADMIN_KEY_HEADER]


class AppInfo:
    """Application metadata."""

    NAME = "mediashelf"
    VERSION = "1.0.0"
    DESCRIPTION = "Personal media collection catalog and admin API"
    AUTHOR = ""


class Paths:
    """Default paths and directories."""

    @staticmethod
    def get_data_dir() -> Path:
        """Get the data directory, honouring MEDIASHELF_DATA_DIR."""
        env_dir = os.getenv("MEDIASHELF_DATA_DIR")
        if env_dir:
            return Path(env_dir)
        return Path.cwd() / "data"

    @staticmethod
    def ensure_dir(path: Path) -> Path:
        """Ensure directory exists and return it."""
        path.mkdir(parents=True, exist_ok=True)
        return path


@dataclass
class ServerSettings:
    """Resolved settings for one admin API instance."""

    data_dir: Path
    admin_key: str = ServerConfig.DEV_ADMIN_KEY
    host: str = ServerConfig.DEFAULT_HOST
    port: int = ServerConfig.DEFAULT_PORT
    cors_origin: str = ServerConfig.DEFAULT_CORS_ORIGIN
    admin_key_configured: bool = True

    def __post_init__(self):
        """Validate settings."""
        if not self.admin_key:
            raise ValueError("Admin key cannot be empty")
        if self.port <= 0 or self.port > 65535:
            raise ValueError("Port must be between 1 and 65535")

    @classmethod
    def from_env(
        cls,
        data_dir: Optional[Path] = None,
        admin_key: Optional[str] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
        cors_origin: Optional[str] = None,
    ) -> "ServerSettings":
        """Build settings from explicit values, falling back to the environment."""
        key = admin_key or os.getenv("ADMIN_KEY")
        return cls(
            data_dir=data_dir or Paths.get_data_dir(),
            admin_key=key or ServerConfig.DEV_ADMIN_KEY,
            host=host or os.getenv("ADMIN_API_HOST") or ServerConfig.DEFAULT_HOST,
            port=port or int(os.getenv("ADMIN_API_PORT") or ServerConfig.DEFAULT_PORT),
            cors_origin=cors_origin
            or os.getenv("ADMIN_CORS_ORIGIN")
            or ServerConfig.DEFAULT_CORS_ORIGIN,
            admin_key_configured=bool(key),
        )
