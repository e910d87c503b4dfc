"""Shared test fixtures."""
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from adboard.config import MINUTE_MS
from adboard.models import Material

# 2024-05-01 12:00:00 UTC; not aligned to the sample step below
NOW = 1_714_564_800_000 + 7 * 1000


def make_curve(values, now=NOW, step_minutes=10):
    """Samples ending at ``now`` (last value) going back by step_minutes."""
    n = len(values)
    return tuple(
        (now - (n - 1 - i) * step_minutes * MINUTE_MS, float(v))
        for i, v in enumerate(values)
    )


def make_material(i=1, **overrides):
    fields = dict(
        id=str(i),
        name=f"视频广告 {i}",
        video_url=f"https://example.com/video{i}.mp4",
        impressions=10_000 * i,
        clicks=100 * i,
        ctr=0.01,
        spend=1_000.0 * i,
        revenue=1_500.0 * i,
        roi=1.5,
    )
    fields.update(overrides)
    return Material(**fields)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def materials_30():
    """Thirty materials named like the reporting API names them."""
    return [
        make_material(
            i,
            consumption_curve=make_curve([i, i, i]),
            roi_curve=make_curve([1.0, 2.0, 3.0]),
        )
        for i in range(1, 31)
    ]
