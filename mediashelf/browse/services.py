"""Filter and sort system driving one catalog page."""

import logging
from typing import Callable, Iterable, List, Optional, Union

from .filters import field_getters, matches_filters
from .models import FilterState, ItemView, SortSpec
from .sorting import sort_items, view_sort_getters
from ..core.config import FilterConfig

logger = logging.getLogger(__name__)

STATUS_DIMENSION = "status"


class FilterSystem:
    """Owns the filter state, sort key and item order of one catalog page.

    Every event handler recomputes the page synchronously and runs to
    completion, so callers never observe a half-updated collection.
    """

    def __init__(
        self,
        views: Iterable[ItemView],
        dimensions: Iterable[str],
        on_change: Optional[Callable[["FilterSystem"], None]] = None,
    ):
        """Initialize with the page's item views and filter dimensions."""
        self.items: List[ItemView] = list(views)
        self.filters = FilterState.for_dimensions(dimensions)
        self.sort = SortSpec.parse(FilterConfig.DEFAULT_SORT)
        self.on_change = on_change
        self._getters = field_getters(self.filters.dimensions)
        self._sort_getters = view_sort_getters()

        for index, item in enumerate(self.items):
            item.reposition(index)
        self._notify()

    @property
    def total_count(self) -> int:
        return len(self.items)

    @property
    def visible_count(self) -> int:
        return sum(1 for item in self.items if item.is_visible())

    @property
    def stats(self) -> str:
        """Counter text shown next to the filter chips."""
        if self.visible_count == self.total_count:
            return f"Total: {self.total_count}"
        return f"Showing {self.visible_count} / {self.total_count}"

    def visible_items(self) -> List[ItemView]:
        """Visible views in display order."""
        return [item for item in self.items if item.is_visible()]

    def select_filter(self, dimension: str, value: Optional[str]) -> None:
        """Handle a filter chip activation."""
        if not self.filters.set(dimension, value):
            logger.debug("Ignoring unknown filter dimension %r", dimension)
            return
        self.apply_filters()

    def change_status(self, status: Optional[str]) -> None:
        """Handle the status selector, which is not driven by chips."""
        self.select_filter(STATUS_DIMENSION, status)

    def change_sort(self, sort: Union[SortSpec, str]) -> None:
        """Reorder every item, hidden ones included, by a new sort key."""
        try:
            spec = sort if isinstance(sort, SortSpec) else SortSpec.parse(sort)
        except (AttributeError, TypeError):
            logger.debug("Ignoring malformed sort value %r", sort)
            return

        self.sort = spec
        self.items = sort_items(self.items, spec, self._sort_getters)
        for index, item in enumerate(self.items):
            item.reposition(index)
        self._notify()

    def apply_filters(self) -> None:
        """Recompute visibility of every item from the current filter state."""
        for item in self.items:
            item.set_visible(matches_filters(item, self.filters, self._getters))
        self._notify()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self)
