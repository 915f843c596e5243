"""Browse domain models: filter state, sort key and item views."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, Optional, Protocol, Tuple

from ..core.config import FilterConfig


class SortField(Enum):
    """Fields a catalog page can be sorted by."""

    ADDED = "added"
    RATING = "rating"
    YEAR = "year"
    TITLE = "title"


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortSpec:
    """Sort field plus direction, written as '<field>-<direction>'.

    The field is kept as given so an unknown field can travel through to the
    sorter, which leaves the order unchanged for it.
    """

    field: str
    direction: SortDirection = SortDirection.ASC

    @classmethod
    def parse(cls, value: str) -> "SortSpec":
        """Parse 'rating-desc' style values; anything but 'desc' sorts ascending."""
        field_name, _, direction = (value or "").partition("-")
        if direction == SortDirection.DESC.value:
            return cls(field_name, SortDirection.DESC)
        return cls(field_name, SortDirection.ASC)

    @property
    def sort_field(self) -> Optional[SortField]:
        """The recognised sort field, or None."""
        try:
            return SortField(self.field)
        except ValueError:
            return None

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC

    def __str__(self) -> str:
        return f"{self.field}-{self.direction.value}"


@dataclass
class FilterState:
    """Active filter value per dimension; 'all' disables a dimension."""

    values: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def for_dimensions(cls, dimensions: Iterable[str]) -> "FilterState":
        """Initial state with every dimension set to 'all'."""
        return cls({dimension: FilterConfig.ALL for dimension in dimensions})

    @property
    def dimensions(self) -> Tuple[str, ...]:
        return tuple(self.values)

    def get(self, dimension: str) -> str:
        return self.values.get(dimension, FilterConfig.ALL)

    def set(self, dimension: str, value: Optional[str]) -> bool:
        """Set a recognised dimension; empty values mean 'all'.

        Returns False and leaves the state untouched for unknown dimensions.
        """
        if dimension not in self.values:
            return False
        self.values[dimension] = value or FilterConfig.ALL
        return True

    def active(self) -> Dict[str, str]:
        """Dimensions currently narrowing the results."""
        return {k: v for k, v in self.values.items() if v != FilterConfig.ALL}

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self.values.items())


class ItemView(Protocol):
    """Rendered projection of one catalog item, as seen by the filter system."""

    def get_field(self, name: str) -> Optional[str]:
        ...

    def set_visible(self, visible: bool) -> None:
        ...

    def is_visible(self) -> bool:
        ...

    def reposition(self, index: int) -> None:
        ...


@dataclass
class RecordView:
    """In-memory item view backed by a stored record."""

    record: Dict[str, Any]
    visible: bool = True
    position: int = 0

    def get_field(self, name: str) -> Optional[str]:
        """Field value as text, the way a rendered attribute would hold it."""
        value = self.record.get(FilterConfig.DIMENSION_FIELDS.get(name, name))
        if value is None or value == "":
            return None
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)

    def set_visible(self, visible: bool) -> None:
        self.visible = visible

    def is_visible(self) -> bool:
        return self.visible

    def reposition(self, index: int) -> None:
        self.position = index
