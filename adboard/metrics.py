"""
Windowed aggregates over material curves.

All functions take ``now_ms`` explicitly; nothing here reads the clock except
``now_ms()`` itself, which the UI calls once per render pass.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .config import MINUTE_MS
from .models import Curve, Material

# Sentinel for "no samples in the window"; rendered as "-" and never equal to 0.0
NO_DATA = None

RECENT_FIELDS = ("recent_spend", "recent_roi")


def now_ms() -> int:
    return int(time.time() * 1000)


def window_samples(curve: Curve, window_minutes: int, now: int) -> list:
    """Samples with now - window <= timestamp <= now (both ends inclusive)."""
    if window_minutes <= 0:
        return []
    start = now - window_minutes * MINUTE_MS
    return [(ts, v) for ts, v in curve if start <= ts <= now]


def window_sum(curve: Curve, window_minutes: int, now: int) -> Optional[float]:
    samples = window_samples(curve, window_minutes, now)
    if not samples:
        return NO_DATA
    return float(sum(v for _, v in samples))


def window_mean(curve: Curve, window_minutes: int, now: int) -> Optional[float]:
    samples = window_samples(curve, window_minutes, now)
    if not samples:
        return NO_DATA
    return float(sum(v for _, v in samples) / len(samples))


def recent_spend(material: Material, window_minutes: int, now: int) -> Optional[float]:
    """Total spend over the trailing window, or NO_DATA."""
    return window_sum(material.consumption_curve, window_minutes, now)


def recent_roi(material: Material, window_minutes: int, now: int) -> Optional[float]:
    """Mean ROI over the trailing window, or NO_DATA."""
    return window_mean(material.roi_curve, window_minutes, now)


@dataclass(frozen=True)
class RecentMetrics:
    recent_spend: Optional[float]
    recent_roi: Optional[float]


@dataclass(frozen=True)
class MaterialRow:
    """A material paired with the windowed metrics of one render pass."""
    material: Material
    recent: RecentMetrics

    @property
    def id(self) -> str:
        return self.material.id

    def value(self, column_id: str):
        if column_id in RECENT_FIELDS:
            return getattr(self.recent, column_id)
        return self.material.get(column_id)


def recent_metrics(material: Material, window_minutes: int, now: int) -> RecentMetrics:
    return RecentMetrics(
        recent_spend=recent_spend(material, window_minutes, now),
        recent_roi=recent_roi(material, window_minutes, now),
    )


def derive_rows(materials: Iterable[Material], window_minutes: int, now: int) -> List[MaterialRow]:
    return [MaterialRow(m, recent_metrics(m, window_minutes, now)) for m in materials]
