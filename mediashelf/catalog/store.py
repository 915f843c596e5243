"""JSON file store for catalog collections."""

import json
import logging
import re
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .schema import validate_item
from ..core.config import Category, Paths
from ..core.exceptions import (
    MalformedPayloadError,
    NotFoundError,
    StorageError,
    UnknownCategoryError,
    ValidationError,
)

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


def resolve_category(category: Union[Category, str]) -> Category:
    """Map a category name to a Category, raising for unknown names."""
    if isinstance(category, Category):
        return category
    try:
        return Category(category)
    except ValueError:
        raise UnknownCategoryError(str(category))


def _reject_constant(name: str) -> None:
    raise MalformedPayloadError(details=f"{name} is not valid JSON")


def parse_payload(raw: Union[str, bytes]) -> Record:
    """Parse a write payload, which must be a strict JSON object.

    NaN and Infinity are refused along with any other invalid JSON.
    """
    try:
        body = json.loads(raw, parse_constant=_reject_constant)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedPayloadError(details=str(e))
    if not isinstance(body, dict):
        raise MalformedPayloadError("Payload must be a JSON object")
    return body


class CatalogStore:
    """Reads and writes one JSON file per category.

    Writes are plain read-modify-write cycles on the file; concurrent writers
    race and the last one wins.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        """Initialize with optional data directory."""
        self.data_dir = Path(data_dir) if data_dir else Paths.get_data_dir()
        # Highest id number handed out per category during this run
        self._last_ids: Dict[Category, int] = {}

    def path_for(self, category: Union[Category, str]) -> Path:
        """Data file path for a category."""
        return self.data_dir / resolve_category(category).filename

    def read_all(self, category: Union[Category, str]) -> List[Record]:
        """Return the full collection; a missing file is an empty collection."""
        path = self.path_for(category)
        if not path.exists():
            return []
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(
                f"Failed to read {path.name}",
                file_path=str(path),
                operation="read",
                details=str(e),
            )
        if not isinstance(data, list):
            raise StorageError(
                f"Data file {path.name} must hold a JSON array",
                file_path=str(path),
                operation="read",
            )
        return data

    def get(self, category: Union[Category, str], item_id: str) -> Record:
        """Return one record by identifier."""
        for item in self.read_all(category):
            if item.get("id") == item_id:
                return item
        raise NotFoundError(item_id, category=resolve_category(category).value)

    def create(self, category: Union[Category, str], payload: Record) -> Record:
        """Validate and prepend a new record, assigning its id and addedDate."""
        category = resolve_category(category)
        self._validate(category, payload)

        items = self.read_all(category)
        body = {key: value for key, value in payload.items() if key != "id"}
        new_item = {
            "id": self.generate_id(category, items),
            **body,
            "addedDate": payload.get("addedDate") or date.today().isoformat(),
        }

        items.insert(0, new_item)
        self._write_all(category, items)
        logger.info("Created %s: %s", category.value, new_item.get("title"))
        return new_item

    def update(
        self, category: Union[Category, str], item_id: str, payload: Record
    ) -> Record:
        """Validate the payload and merge it over an existing record."""
        category = resolve_category(category)
        self._validate(category, payload)

        items = self.read_all(category)
        index = self._index_of(items, item_id)
        if index is None:
            raise NotFoundError(item_id, category=category.value)

        items[index] = {**items[index], **payload, "id": item_id}
        self._write_all(category, items)
        logger.info("Updated %s: %s", category.value, items[index].get("title"))
        return items[index]

    def delete(self, category: Union[Category, str], item_id: str) -> Record:
        """Remove a record by identifier and return it."""
        category = resolve_category(category)
        items = self.read_all(category)
        index = self._index_of(items, item_id)
        if index is None:
            raise NotFoundError(item_id, category=category.value)

        deleted = items.pop(index)
        self._write_all(category, items)
        logger.info("Deleted %s: %s", category.value, deleted.get("title"))
        return deleted

    def generate_id(self, category: Category, items: List[Record]) -> str:
        """Next '{prefix}-{n}' id, never reusing a number handed out this run."""
        pattern = re.compile(rf"{re.escape(category.id_prefix)}-(\d+)")
        max_id = self._last_ids.get(category, 0)
        for item in items:
            match = pattern.search(str(item.get("id") or ""))
            if match:
                max_id = max(max_id, int(match.group(1)))
        self._last_ids[category] = max_id + 1
        return f"{category.id_prefix}-{max_id + 1}"

    def _validate(self, category: Category, payload: Record) -> None:
        result = validate_item(category, payload)
        if not result.is_valid:
            raise ValidationError(result.errors, category=category.value)

    def _index_of(self, items: List[Record], item_id: str) -> Optional[int]:
        for index, item in enumerate(items):
            if item.get("id") == item_id:
                return index
        return None

    def _write_all(self, category: Category, items: List[Record]) -> None:
        path = self.path_for(category)
        try:
            # Serialize before truncating the file
            content = json.dumps(items, indent=2, ensure_ascii=False, allow_nan=False)
            Paths.ensure_dir(path.parent)
            with open(path, "w", encoding="utf-8") as f:
                f.write(content)
        except (OSError, ValueError) as e:
            raise StorageError(
                f"Failed to write {path.name}",
                file_path=str(path),
                operation="write",
                details=str(e),
            )
