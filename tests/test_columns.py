"""Tests for the adboard.columns catalogue."""
import pytest

from adboard.columns import COLUMN_IDS, COLUMNS, get_column
from adboard.config import PINNED_COLUMNS


def test_ids_are_unique():
    assert len(set(COLUMN_IDS)) == len(COLUMNS) == 28


def test_pinned_columns_lead_the_catalogue():
    assert COLUMN_IDS[:2] == PINNED_COLUMNS
    assert all(get_column(c).pinned for c in PINNED_COLUMNS)
    assert not get_column("name").pinned


def test_media_action_and_curve_columns_are_not_sortable():
    unsortable = {c.id for c in COLUMNS if not c.sortable}
    assert unsortable == {"preview", "actions", "consumption_curve", "roi_curve"}


def test_recent_labels_embed_window():
    assert get_column("recent_spend").label(180) == "近180分钟消耗"
    assert get_column("recent_roi").label() == "近30分钟ROI"
    assert get_column("spend").label(180) == "整体消耗"


def test_unknown_column():
    with pytest.raises(KeyError):
        get_column("nope")
