"""Tests for the mock metric source."""
from datetime import datetime

import numpy as np
import pytest

from adboard.config import DashboardConfig, MINUTE_MS
from adboard.errors import FetchError
from adboard.mock_data import fetch_dashboard, fetch_materials, generate_materials
from adboard.overview import STAT_METRICS

START = datetime(2024, 5, 1, 0, 0, 0)
END = datetime(2024, 5, 1, 23, 59, 59, 999000)
END_MS = int(END.timestamp() * 1000)


def _no_sleep(seconds):
    pass


@pytest.fixture
def cfg():
    return DashboardConfig(material_count=12, curve_points=20, fetch_latency=0.0, seed=7)


def _fetch(cfg, **kwargs):
    kwargs.setdefault("now", END_MS + 60 * MINUTE_MS)
    return fetch_dashboard(START, END, cfg=cfg, sleep=_no_sleep, **kwargs)


def test_fetch_returns_configured_material_count(cfg):
    data = _fetch(cfg)
    assert len(data.materials) == 12
    assert [m.id for m in data.materials] == [str(i) for i in range(1, 13)]
    assert data.materials[0].name == "视频广告 1"


def test_material_values_are_consistent(cfg):
    for m in _fetch(cfg).materials:
        assert m.revenue == pytest.approx(m.spend * m.roi)
        assert m.ctr == pytest.approx(m.clicks / m.impressions)
        assert 0 <= m.spend_ratio <= 1
        assert m.reinvestment_revenue == pytest.approx(m.reinvestment_spend * m.reinvestment_roi)


def test_spend_ratios_sum_to_one(cfg):
    assert sum(m.spend_ratio for m in _fetch(cfg).materials) == pytest.approx(1.0)


def test_curves_end_at_day_end_for_past_days(cfg):
    m = _fetch(cfg).materials[0]
    assert len(m.consumption_curve) == 20
    assert m.consumption_curve[-1][0] == END_MS
    steps = {b[0] - a[0] for a, b in zip(m.consumption_curve, m.consumption_curve[1:])}
    assert steps == {10 * MINUTE_MS}


def test_curves_do_not_run_past_now(cfg):
    now = END_MS - 5 * 60 * MINUTE_MS
    data = _fetch(cfg, now=now)
    assert all(ts <= now for m in data.materials for ts, _ in m.roi_curve)
    assert data.fetched_at == now


def test_overview_has_one_series_per_card(cfg):
    data = _fetch(cfg)
    assert set(data.overview) == {m.id for m in STAT_METRICS}
    series = data.overview["total_spend"]
    assert series[0][0] == data.start_ms
    assert series[-1][0] <= data.end_ms


def test_overview_centres_on_material_mean(cfg):
    data = _fetch(cfg)
    mean_roi = np.mean([m.roi for m in data.materials])
    values = [v for _, v in data.overview["total_roi"]]
    assert min(values) >= mean_roi / 1.05 - 1e-9
    assert max(values) <= mean_roi / 1.05 * 1.1 + 1e-9


def test_same_seed_same_data(cfg):
    a = _fetch(cfg).materials
    b = _fetch(cfg).materials
    assert a == b


def test_latency_goes_through_sleep(cfg):
    calls = []
    cfg.fetch_latency = 0.25
    fetch_dashboard(START, END, cfg=cfg, sleep=calls.append, now=END_MS)
    assert calls == [0.25]


def test_failure_raises_fetch_error(cfg):
    cfg.fail_rate = 1.0
    with pytest.raises(FetchError, match="加载数据时出错"):
        _fetch(cfg)


def test_reversed_range_is_rejected(cfg):
    with pytest.raises(ValueError):
        fetch_dashboard(END, START, cfg=cfg, sleep=_no_sleep)


def test_fetch_materials_is_material_list(cfg):
    materials = fetch_materials(START, END, cfg=cfg, sleep=_no_sleep, now=END_MS)
    assert len(materials) == 12


def test_generate_materials_with_defaults():
    materials = generate_materials(np.random.default_rng(1), END_MS)
    assert len(materials) == 30
    assert all(len(m.roi_curve) == 144 for m in materials)
