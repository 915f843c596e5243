"""Filter matching shared by the catalog pages.

Multi-value fields such as co-production countries are stored as one string
joined by slashes ("美国 / 英国"); every matcher here splits them into atoms
before comparing.
"""

import re
from typing import Callable, Dict, Iterable, List, Mapping, Optional, TypeVar

from .models import FilterState
from ..core.config import FilterConfig

T = TypeVar("T")

Getter = Callable[[T], Optional[str]]

SLASH_SEPARATOR = re.compile(r"\s*/\s*")

ADDED_DIMENSION = "added"


def get_added_year(added_date: Optional[str]) -> str:
    """Leading four characters of an added date ('2023-05-01' -> '2023')."""
    return (added_date or "")[:4]


def split_by_slash(value: Optional[str]) -> List[str]:
    """Split a slash-separated value into its non-empty, stripped atoms."""
    if not value:
        return []
    return [part.strip() for part in SLASH_SEPARATOR.split(value) if part.strip()]


def matches_filter(
    item_value: Optional[str], filter_value: str, match_mode: str = "contains"
) -> bool:
    """Check one item value against one filter value.

    'all' matches everything. An empty item value matches nothing else. In
    'exact' mode the whole value must equal the filter value; in 'contains'
    mode any slash-separated atom must.
    """
    if filter_value == FilterConfig.ALL:
        return True
    if not item_value:
        return False

    if match_mode == "exact":
        return item_value == filter_value

    return filter_value in split_by_slash(item_value)


def matches_filters(
    item: T, filters: FilterState, field_mapping: Mapping[str, Getter]
) -> bool:
    """True when the item satisfies every active dimension.

    Dimensions without an accessor in ``field_mapping`` are ignored. The
    'added' dimension compares the year of the added date exactly.
    """
    for dimension, filter_value in filters:
        if filter_value == FilterConfig.ALL:
            continue

        getter = field_mapping.get(dimension)
        if getter is None:
            continue

        item_value = getter(item)
        if dimension == ADDED_DIMENSION:
            if not matches_filter(get_added_year(item_value), filter_value, "exact"):
                return False
        elif not matches_filter(item_value, filter_value):
            return False

    return True


def filter_items(
    items: Iterable[T], filters: FilterState, field_mapping: Mapping[str, Getter]
) -> List[T]:
    """Items matching every active dimension, in input order."""
    return [item for item in items if matches_filters(item, filters, field_mapping)]


def extract_filter_options(items: Iterable[T], getter: Getter) -> List[str]:
    """Sorted unique atoms of a possibly multi-valued field."""
    values = set()
    for item in items:
        values.update(split_by_slash(getter(item)))
    return sorted(values)


def extract_numeric_options(
    items: Iterable[T], getter: Callable[[T], Optional[float]]
) -> List[float]:
    """Unique numeric values, highest first."""
    values = {value for value in map(getter, items) if value is not None}
    return sorted(values, reverse=True)


def field_getters(dimensions: Iterable[str]) -> Dict[str, Getter]:
    """Accessors reading each dimension from an item view."""
    return {dimension: _view_getter(dimension) for dimension in dimensions}


def _view_getter(dimension: str) -> Getter:
    def getter(view):
        return view.get_field(dimension)

    return getter
