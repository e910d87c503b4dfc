"""
Table view state and its transitions.

``TableViewState`` is an immutable value; every operation returns a new state
so the table can be driven (and tested) without a rendering environment.
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence, Tuple

from .columns import COLUMNS, ColumnDef
from .config import MAX_COLUMN_WIDTH, MIN_COLUMN_WIDTH, PAGE_SIZES, PINNED_COLUMNS

logger = logging.getLogger(__name__)


# =============================================================================
# State
# =============================================================================

@dataclass(frozen=True)
class SortState:
    column_id: str
    descending: bool = False


@dataclass(frozen=True)
class TableViewState:
    column_order: Tuple[str, ...]
    column_visibility: Mapping[str, bool]
    column_widths: Mapping[str, int]
    sort: Optional[SortState] = None
    page_index: int = 0
    page_size: int = 10
    sortable: frozenset = frozenset()

    @property
    def column_ids(self) -> frozenset:
        return frozenset(self.column_order)

    def is_visible(self, column_id: str) -> bool:
        return self.column_visibility[column_id]

    def visible_ids(self) -> List[str]:
        return [c for c in self.column_order if self.column_visibility[c]]


def freeze_mapping(d: dict) -> Mapping:
    return MappingProxyType(dict(d))


def initial_state(columns: Sequence[ColumnDef] = COLUMNS, page_size: int = 10) -> TableViewState:
    """Default layout: catalogue order, everything visible, unsorted, first page."""
    if page_size not in PAGE_SIZES:
        raise ValueError(f"page_size must be one of {PAGE_SIZES}, got {page_size}")
    return TableViewState(
        column_order=tuple(c.id for c in columns),
        column_visibility=freeze_mapping({c.id: True for c in columns}),
        column_widths=freeze_mapping({c.id: clamp_width(c.width) for c in columns}),
        page_size=page_size,
        sortable=frozenset(c.id for c in columns if c.sortable),
    )


def _require(state: TableViewState, column_id: str):
    if column_id not in state.column_visibility:
        raise KeyError(f"Unknown column id '{column_id}'")


# =============================================================================
# Sorting
# =============================================================================

def toggle_sort(state: TableViewState, column_id: str) -> TableViewState:
    """Cycle a column through ascending -> descending -> unsorted."""
    _require(state, column_id)
    if column_id not in state.sortable:
        raise ValueError(f"Column '{column_id}' is not sortable")

    current = state.sort
    if current is None or current.column_id != column_id:
        new_sort = SortState(column_id, descending=False)
    elif not current.descending:
        new_sort = SortState(column_id, descending=True)
    else:
        new_sort = None
    return replace(state, sort=new_sort)


def sort_indicator(state: TableViewState, column_id: str) -> Optional[str]:
    """'asc', 'desc' or None for the given column."""
    if state.sort is None or state.sort.column_id != column_id:
        return None
    return "desc" if state.sort.descending else "asc"


def _is_missing(value) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


_DIGITS = re.compile(r"(\d+)")


def natural_key(text: str) -> list:
    """Case-insensitive key comparing digit runs as numbers ('广告 2' < '广告 10')."""
    parts = _DIGITS.split(text.lower())
    return [int(p) if i % 2 else p for i, p in enumerate(parts)]


def _sort_key(value):
    return natural_key(value) if isinstance(value, str) else value


def sort_rows(rows: Sequence, sort: Optional[SortState]) -> list:
    """
    Stable single-column sort of rows exposing ``value(column_id)``.

    Text compares naturally, so digit runs order by value. Rows with a
    missing value go last in both directions; equal keys keep their incoming
    order.
    """
    rows = list(rows)
    if sort is None:
        return rows

    present, missing = [], []
    for r in rows:
        (missing if _is_missing(r.value(sort.column_id)) else present).append(r)

    present = sorted(present, key=lambda r: _sort_key(r.value(sort.column_id)), reverse=sort.descending)
    return present + missing


# =============================================================================
# Visibility / order / width
# =============================================================================

def set_column_visibility(state: TableViewState, column_id: str, visible: bool) -> TableViewState:
    _require(state, column_id)
    if column_id in PINNED_COLUMNS:
        return state
    visibility = dict(state.column_visibility)
    visibility[column_id] = bool(visible)
    return replace(state, column_visibility=freeze_mapping(visibility))


def toggle_column_visibility(state: TableViewState, column_id: str) -> TableViewState:
    _require(state, column_id)
    return set_column_visibility(state, column_id, not state.column_visibility[column_id])


def reorder(items: Sequence, source: int, destination: Optional[int]) -> list:
    """Move items[source] to index destination; None destination is a no-op."""
    items = list(items)
    if destination is None:
        return items
    if not 0 <= source < len(items):
        raise IndexError(f"source index {source} out of range")
    if not 0 <= destination < len(items):
        raise IndexError(f"destination index {destination} out of range")
    moved = items.pop(source)
    items.insert(destination, moved)
    return items


def pin_order(order: Sequence[str]) -> Tuple[str, ...]:
    """Put the pinned ids first, keep everything else in its relative order."""
    pinned = [c for c in PINNED_COLUMNS if c in order]
    return tuple(pinned + [c for c in order if c not in PINNED_COLUMNS])


def move_column(state: TableViewState, source: int, destination: Optional[int]) -> TableViewState:
    """Drag a column within the full order; pinned columns stay at the front."""
    new_order = pin_order(reorder(state.column_order, source, destination))
    return replace(state, column_order=new_order)


def set_column_order(state: TableViewState, order: Sequence[str]) -> TableViewState:
    if set(order) != set(state.column_order) or len(order) != len(state.column_order):
        raise ValueError("column order must be a permutation of the existing columns")
    return replace(state, column_order=pin_order(order))


def clamp_width(width) -> int:
    return int(min(MAX_COLUMN_WIDTH, max(MIN_COLUMN_WIDTH, round(width))))


def set_column_width(state: TableViewState, column_id: str, width) -> TableViewState:
    """Resize one column; other widths are untouched."""
    _require(state, column_id)
    widths = dict(state.column_widths)
    widths[column_id] = clamp_width(width)
    return replace(state, column_widths=freeze_mapping(widths))


# =============================================================================
# Pagination
# =============================================================================

def page_count(total_rows: int, page_size: int) -> int:
    """Number of pages; an empty result still has one (empty) page."""
    return max(1, math.ceil(max(0, total_rows) / page_size))


def clamp_page_index(page_index: int, total_rows: int, page_size: int) -> int:
    return min(max(0, page_index), page_count(total_rows, page_size) - 1)


def next_page_index(page_index: int, total_rows: int, page_size: int) -> int:
    if page_index >= page_count(total_rows, page_size) - 1:
        return page_index
    return page_index + 1


def previous_page_index(page_index: int, total_rows: int, page_size: int) -> int:
    if page_index <= 0:
        return page_index
    return page_index - 1


def next_page(state: TableViewState, total_rows: int) -> TableViewState:
    return replace(state, page_index=next_page_index(state.page_index, total_rows, state.page_size))


def previous_page(state: TableViewState, total_rows: int) -> TableViewState:
    return replace(state, page_index=previous_page_index(state.page_index, total_rows, state.page_size))


def go_to_page(state: TableViewState, page_index: int, total_rows: int) -> TableViewState:
    return replace(state, page_index=clamp_page_index(page_index, total_rows, state.page_size))


def clamp_page(state: TableViewState, total_rows: int) -> TableViewState:
    """Pull page_index back inside the result after a reload or a new filter."""
    clamped = clamp_page_index(state.page_index, total_rows, state.page_size)
    if clamped == state.page_index:
        return state
    logger.debug("page_index %s clamped to %s (%s rows)", state.page_index, clamped, total_rows)
    return replace(state, page_index=clamped)


def set_page_size(state: TableViewState, page_size: int, total_rows: int) -> TableViewState:
    """
    Change the page size, keeping the first row of the current page on screen
    and clamping to the last valid page of the new layout.
    """
    if page_size not in PAGE_SIZES:
        raise ValueError(f"page_size must be one of {PAGE_SIZES}, got {page_size}")
    first_row = state.page_index * state.page_size
    page_index = clamp_page_index(first_row // page_size, total_rows, page_size)
    return replace(state, page_size=page_size, page_index=page_index)


def paginate(rows: Sequence, page_index: int, page_size: int) -> list:
    start = page_index * page_size
    return list(rows[start:start + page_size])


# =============================================================================
# Snapshot for rendering
# =============================================================================

@dataclass(frozen=True)
class ColumnView:
    id: str
    label: str
    kind: str
    width: int
    sortable: bool
    sort: Optional[str]
    pinned: bool


@dataclass(frozen=True)
class PageInfo:
    page_index: int
    page_count: int
    page_size: int
    total_rows: int

    @property
    def can_previous(self) -> bool:
        return self.page_index > 0

    @property
    def can_next(self) -> bool:
        return self.page_index < self.page_count - 1

    @property
    def first_row(self) -> int:
        return self.page_index * self.page_size

    @property
    def last_row(self) -> int:
        return min(self.total_rows, self.first_row + self.page_size)


@dataclass(frozen=True)
class TableView:
    columns: Tuple[ColumnView, ...]
    rows: Tuple
    sorted_rows: Tuple
    page: PageInfo

    @property
    def is_empty(self) -> bool:
        return not self.rows


def build_view(
    state: TableViewState,
    rows: Sequence,
    columns: Sequence[ColumnDef] = COLUMNS,
    window_minutes: Optional[int] = None,
) -> TableView:
    """
    Sort and paginate filtered rows and describe the visible columns.

    ``rows`` is the filter output in display order; ``state.page_index`` is
    clamped against it, so callers should store ``view.page.page_index``.
    """
    by_id = {c.id: c for c in columns}
    col_views = tuple(
        ColumnView(
            id=cid,
            label=by_id[cid].label(window_minutes),
            kind=by_id[cid].kind,
            width=state.column_widths[cid],
            sortable=cid in state.sortable,
            sort=sort_indicator(state, cid),
            pinned=cid in PINNED_COLUMNS,
        )
        for cid in state.visible_ids()
    )

    ordered = sort_rows(rows, state.sort)
    total = len(ordered)
    page_index = clamp_page_index(state.page_index, total, state.page_size)
    page = PageInfo(
        page_index=page_index,
        page_count=page_count(total, state.page_size),
        page_size=state.page_size,
        total_rows=total,
    )
    return TableView(
        columns=col_views,
        rows=tuple(paginate(ordered, page_index, state.page_size)),
        sorted_rows=tuple(ordered),
        page=page,
    )
