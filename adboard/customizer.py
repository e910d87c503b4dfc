"""
Column customizer: search, show/hide and reorder the non-pinned columns.

Every function returns a new TableViewState; there is no draft copy, so a
change is live as soon as it is made.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

from .columns import COLUMNS, ColumnDef
from .config import PINNED_COLUMNS
from .table_state import (
    TableViewState,
    freeze_mapping,
    reorder,
    set_column_visibility,
)


@dataclass(frozen=True)
class ColumnChoice:
    id: str
    label: str
    visible: bool


def _editable(state: TableViewState) -> List[str]:
    return [c for c in state.column_order if c not in PINNED_COLUMNS]


def search_columns(
    state: TableViewState,
    query: str = "",
    window_minutes: Optional[int] = None,
    columns: Sequence[ColumnDef] = COLUMNS,
) -> List[ColumnChoice]:
    """Non-pinned columns whose label contains ``query`` (case-insensitive)."""
    by_id = {c.id: c for c in columns}
    needle = (query or "").strip().lower()
    choices = []
    for cid in _editable(state):
        label = by_id[cid].label(window_minutes)
        if needle and needle not in label.lower():
            continue
        choices.append(ColumnChoice(cid, label, state.column_visibility[cid]))
    return choices


def selected_columns(state: TableViewState) -> List[str]:
    """Visible non-pinned column ids in display order."""
    return [c for c in _editable(state) if state.column_visibility[c]]


def set_visible(state: TableViewState, column_id: str, visible: bool) -> TableViewState:
    return set_column_visibility(state, column_id, visible)


def remove_selected(state: TableViewState, column_id: str) -> TableViewState:
    return set_column_visibility(state, column_id, False)


def reorder_selected(state: TableViewState, source: int, destination: Optional[int]) -> TableViewState:
    """
    Move an entry within the selected list and rebuild the full order as
    pinned ids, then the selected list, then hidden columns.
    """
    selected = reorder(selected_columns(state), source, destination)
    hidden = [c for c in _editable(state) if not state.column_visibility[c]]
    pinned = [c for c in PINNED_COLUMNS if c in state.column_order]
    return replace(state, column_order=tuple(pinned + selected + hidden))


def reset_columns(state: TableViewState) -> TableViewState:
    """Hide every non-pinned column."""
    visibility = {c: (c in PINNED_COLUMNS) for c in state.column_order}
    return replace(state, column_visibility=freeze_mapping(visibility))
