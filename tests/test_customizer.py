"""Tests for adboard.customizer column search, selection and ordering."""

import pytest

from adboard.config import PINNED_COLUMNS
from adboard.customizer import (
    remove_selected,
    reorder_selected,
    reset_columns,
    search_columns,
    selected_columns,
    set_visible,
)
from adboard.table_state import initial_state, set_column_visibility


def _only(*ids):
    state = reset_columns(initial_state())
    for cid in ids:
        state = set_visible(state, cid, True)
    return state


# ── Search ──────────────────────────────────────────────────────────


def test_search_excludes_pinned_columns():
    ids = [c.id for c in search_columns(initial_state())]
    assert not set(ids) & set(PINNED_COLUMNS)
    assert len(ids) == 26


def test_search_matches_label_substring():
    ids = [c.id for c in search_columns(initial_state(), "追投")]
    assert ids == ["reinvestment_spend", "reinvestment_orders", "reinvestment_revenue", "reinvestment_roi"]


def test_search_is_case_insensitive():
    upper = [c.id for c in search_columns(initial_state(), "ROI")]
    lower = [c.id for c in search_columns(initial_state(), "roi")]
    assert upper == lower
    assert "roi_curve" in upper and "recent_roi" in upper


def test_search_labels_follow_window():
    choices = {c.id: c.label for c in search_columns(initial_state(), window_minutes=120)}
    assert choices["recent_spend"] == "近120分钟消耗"
    assert [c.id for c in search_columns(initial_state(), "近120分钟", window_minutes=120)] == [
        "recent_spend", "recent_roi",
    ]


def test_search_reports_visibility():
    state = set_column_visibility(initial_state(), "ctr", False)
    by_id = {c.id: c.visible for c in search_columns(state)}
    assert by_id["ctr"] is False
    assert by_id["clicks"] is True


def test_search_with_no_match_is_empty():
    assert search_columns(initial_state(), "zzz") == []


# ── Selection ───────────────────────────────────────────────────────


def test_selected_columns_follow_order():
    state = _only("roi", "name", "spend")
    assert selected_columns(state) == ["name", "spend", "roi"]


def test_remove_selected_hides_column():
    state = remove_selected(_only("name", "spend"), "name")
    assert selected_columns(state) == ["spend"]


def test_reset_hides_everything_but_pins():
    state = reset_columns(initial_state())
    assert selected_columns(state) == []
    assert state.visible_ids() == list(PINNED_COLUMNS)


def test_pinned_columns_stay_visible_through_customizer():
    state = set_visible(initial_state(), "preview", False)
    assert state.is_visible("preview")


# ── Reorder ─────────────────────────────────────────────────────────


def test_reorder_selected_moves_within_selected_list():
    state = reorder_selected(_only("name", "spend", "roi"), 2, 0)
    assert selected_columns(state) == ["roi", "name", "spend"]


def test_reorder_selected_keeps_pins_first_and_hidden_last():
    state = reorder_selected(_only("name", "spend", "roi"), 0, 2)
    assert state.column_order[:2] == PINNED_COLUMNS
    assert list(state.column_order[2:5]) == ["spend", "roi", "name"]
    assert not any(state.is_visible(c) for c in state.column_order[5:])
    assert len(state.column_order) == len(initial_state().column_order)


def test_reorder_selected_without_destination_is_noop():
    state = _only("name", "spend")
    assert selected_columns(reorder_selected(state, 0, None)) == ["name", "spend"]


def test_reorder_selected_out_of_range_raises():
    with pytest.raises(IndexError):
        reorder_selected(_only("name"), 0, 4)
