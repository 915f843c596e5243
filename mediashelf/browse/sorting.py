"""Field-aware sorting for catalog items."""

import unicodedata
from functools import lru_cache
from typing import Any, Callable, Dict, Iterable, List, Tuple, Union

from pyuca import Collator

from .models import SortField, SortSpec
from ..core.config import FilterConfig


@lru_cache(maxsize=None)
def _collator() -> Collator:
    # Loading the collation table is slow; build it once on first use
    return Collator()


def text_key(value: Any) -> Tuple[Tuple[int, ...], str]:
    """Collation key following the Unicode Collation Algorithm.

    Accented and non-Latin titles land where a reader expects them; the raw
    text breaks ties so the order is deterministic.
    """
    text = unicodedata.normalize("NFKC", str(value) if value is not None else "")
    return tuple(_collator().sort_key(text)), text


def number_key(value: Any) -> float:
    """Numeric key; missing or unparsable values count as 0."""
    if value is None or value == "" or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _date_key(value: Any) -> str:
    # ISO dates order correctly as plain strings
    return str(value) if value else FilterConfig.EPOCH_DATE


SORT_KEYS: Dict[SortField, Callable[[Any], Any]] = {
    SortField.ADDED: _date_key,
    SortField.RATING: number_key,
    SortField.YEAR: number_key,
    SortField.TITLE: text_key,
}


def sort_items(
    items: Iterable[Any],
    sort: Union[SortSpec, str],
    getters: Dict[str, Callable[[Any], Any]],
) -> List[Any]:
    """Return the items ordered by the sort spec.

    ``getters`` maps each sort field name (added, rating, year, title) to an
    accessor. The sort is stable in both directions. An unknown field or a
    missing getter leaves the order unchanged.
    """
    items = list(items)
    if isinstance(sort, str):
        sort = SortSpec.parse(sort)

    sort_field = sort.sort_field
    if sort_field is None or sort_field.value not in getters:
        return items

    getter = getters[sort_field.value]
    to_key = SORT_KEYS[sort_field]
    return sorted(items, key=lambda item: to_key(getter(item)), reverse=sort.descending)


def view_sort_getters() -> Dict[str, Callable[[Any], Any]]:
    """Sort accessors reading item views."""
    return {
        sort_field.value: _view_getter(sort_field.value) for sort_field in SortField
    }


def _view_getter(name: str) -> Callable[[Any], Any]:
    def getter(view):
        return view.get_field(name)

    return getter
