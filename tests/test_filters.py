"""Tests for adboard.filters threshold parsing and material filtering."""

import pytest

from adboard.filters import FilterCriteria, apply_filters, apply_highlights, parse_threshold
from conftest import NOW, make_curve, make_material


# ── Threshold parsing ───────────────────────────────────────────────


@pytest.mark.parametrize("text, expected", [
    ("10", 10.0),
    (" 2.5 ", 2.5),
    ("-1", -1.0),
    ("0", 0.0),
    (3, 3.0),
])
def test_parse_threshold_numbers(text, expected):
    assert parse_threshold(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "12abc", "nan", "inf", "-inf", None])
def test_parse_threshold_inactive_inputs(text):
    assert parse_threshold(text) is None


def test_from_inputs_treats_garbage_as_no_constraint():
    criteria = FilterCriteria.from_inputs(spend="lots", roi="", recent_spend="x", recent_roi="1e400")
    assert criteria == FilterCriteria()
    assert not criteria.is_active


# ── Name filter ─────────────────────────────────────────────────────


def test_name_filter_single_match(materials_30):
    result = apply_filters(materials_30, FilterCriteria(name_contains="广告 5"), 30, NOW)
    assert [m.name for m in result] == ["视频广告 5"]


def test_name_filter_matches_all(materials_30):
    result = apply_filters(materials_30, FilterCriteria(name_contains="广告"), 30, NOW)
    assert len(result) == 30


def test_name_filter_is_case_sensitive():
    ms = [make_material(1, name="Promo A"), make_material(2, name="promo b")]
    result = apply_filters(ms, FilterCriteria(name_contains="Promo"), 30, NOW)
    assert [m.id for m in result] == ["1"]


def test_empty_name_is_inactive(materials_30):
    criteria = FilterCriteria.from_inputs(name="")
    assert apply_filters(materials_30, criteria, 30, NOW) == materials_30


# ── Numeric thresholds ──────────────────────────────────────────────


def test_spend_bound_is_inclusive(materials_30):
    result = apply_filters(materials_30, FilterCriteria(min_spend=28_000.0), 30, NOW)
    assert [m.id for m in result] == ["28", "29", "30"]


def test_criteria_combine_with_and():
    ms = [
        make_material(1, spend=100.0, roi=2.0),
        make_material(2, spend=100.0, roi=0.5),
        make_material(3, spend=10.0, roi=2.0),
    ]
    result = apply_filters(ms, FilterCriteria(min_spend=50, min_roi=1.0), 30, NOW)
    assert [m.id for m in result] == ["1"]


def test_missing_field_fails_active_bound():
    ms = [make_material(1, roi=None), make_material(2, roi=1.0)]
    assert [m.id for m in apply_filters(ms, FilterCriteria(min_roi=0), 30, NOW)] == ["2"]
    # inactive bound keeps it
    assert len(apply_filters(ms, FilterCriteria(), 30, NOW)) == 2


def test_recent_spend_uses_selected_window():
    m = make_material(consumption_curve=make_curve([50, 50, 50, 50]))  # now-30 .. now
    criteria = FilterCriteria(min_recent_spend=150)
    assert apply_filters([m], criteria, 25, NOW) == [m]          # 3 samples = 150
    assert apply_filters([m], criteria, 15, NOW) == []           # 2 samples = 100


def test_recent_bound_excludes_no_data_rows():
    m = make_material(roi_curve=())
    assert apply_filters([m], FilterCriteria(min_recent_roi=0), 30, NOW) == []


def test_recent_roi_bound():
    hi = make_material(1, roi_curve=make_curve([3.0, 3.0]))
    lo = make_material(2, roi_curve=make_curve([1.0, 1.0]))
    result = apply_filters([hi, lo], FilterCriteria(min_recent_roi=2.0), 30, NOW)
    assert result == [hi]


# ── Properties ──────────────────────────────────────────────────────


def test_filter_is_order_preserving_and_idempotent(materials_30):
    shuffled = materials_30[::-1]
    criteria = FilterCriteria(min_spend=10_000, name_contains="广告 1")
    once = apply_filters(shuffled, criteria, 30, NOW)
    twice = apply_filters(once, criteria, 30, NOW)
    assert once == twice
    assert [m.id for m in once] == ["19", "18", "17", "16", "15", "14", "13", "12", "11", "10"]


def test_filter_does_not_mutate_input(materials_30):
    before = list(materials_30)
    apply_filters(materials_30, FilterCriteria(min_spend=1e9), 30, NOW)
    assert materials_30 == before


# ── Highlight filter ────────────────────────────────────────────────


def test_highlights_keep_rows_at_or_above_every_threshold():
    ms = [
        make_material(1, spend=100.0, ctr=0.05),
        make_material(2, spend=200.0, ctr=0.01),
        make_material(3, spend=300.0, ctr=0.05),
    ]
    assert [m.id for m in apply_highlights(ms, {"spend": 200.0})] == ["2", "3"]
    assert [m.id for m in apply_highlights(ms, {"spend": 200.0, "ctr": 0.05})] == ["3"]


def test_no_highlights_returns_everything():
    ms = [make_material(1), make_material(2)]
    assert apply_highlights(ms, {}) == ms
