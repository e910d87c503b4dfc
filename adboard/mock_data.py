"""
Mock metric source.

Generates a material list and the overview series for one day, standing in
for the reporting API. Values are random but internally consistent (ratios
derive from totals, ROI from revenue over spend).
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional

import numpy as np

from .config import MINUTE_MS, DashboardConfig
from .errors import FetchError
from .models import Curve, Material
from .overview import STAT_METRICS
from .utils import safe_divide

logger = logging.getLogger(__name__)

TOOL_EFFECTS = (None, "提升", "持平", "下降")


@dataclass(frozen=True)
class DashboardData:
    materials: List[Material]
    overview: Dict[str, Curve] = field(default_factory=dict)
    start_ms: int = 0
    end_ms: int = 0
    fetched_at: int = 0


def _to_ms(ts: datetime) -> int:
    return int(ts.timestamp() * 1000)


def _curve(rng: np.random.Generator, anchor_ms: int, points: int, step_minutes: int, max_value: float) -> Curve:
    step = step_minutes * MINUTE_MS
    values = rng.random(points) * max_value
    return tuple(
        (anchor_ms - (points - 1 - i) * step, float(v))
        for i, v in enumerate(values)
    )


def generate_materials(
    rng: np.random.Generator,
    anchor_ms: int,
    cfg: Optional[DashboardConfig] = None,
) -> List[Material]:
    """Build ``cfg.material_count`` materials with curves ending at anchor_ms."""
    cfg = cfg or DashboardConfig()
    n = cfg.material_count

    spend = rng.uniform(1_000, 100_000, n)
    roi = rng.uniform(0.5, 2.5, n)
    revenue = spend * roi
    total_spend = float(spend.sum()) or 1.0
    total_revenue = float(revenue.sum()) or 1.0

    materials = []
    for i in range(n):
        impressions = int(rng.integers(10_000, 1_010_000))
        clicks = int(rng.integers(1_000, 51_000))
        conversion_rate = float(rng.uniform(0, 0.05))
        orders = int(clicks * conversion_rate)
        presale_orders = int(rng.integers(0, 200))
        presale_amount = presale_orders * float(rng.uniform(50, 300))
        reinvest_spend = float(spend[i] * rng.uniform(0, 0.3))
        reinvest_roi = float(rng.uniform(0.5, 3.0))
        reinvest_revenue = reinvest_spend * reinvest_roi

        materials.append(Material(
            id=f"{i + 1}",
            name=f"视频广告 {i + 1}",
            video_url=f"https://example.com/video{i + 1}.mp4",
            impressions=impressions,
            clicks=clicks,
            ctr=clicks / impressions,
            conversion_rate=conversion_rate,
            orders=orders,
            revenue=float(revenue[i]),
            spend=float(spend[i]),
            spend_ratio=float(spend[i]) / total_spend,
            base_spend=float(spend[i] * rng.uniform(0.5, 0.9)),
            order_cost=safe_divide(float(spend[i]), orders),
            roi=float(roi[i]),
            revenue_ratio=float(revenue[i]) / total_revenue,
            presale_amount=presale_amount,
            presale_orders=presale_orders,
            estimated_presale_amount=presale_amount * float(rng.uniform(0, 0.5)),
            coupon_amount=float(revenue[i] * rng.uniform(0, 0.05)),
            tool_effectiveness=TOOL_EFFECTS[int(rng.integers(0, len(TOOL_EFFECTS)))],
            reinvestment_spend=reinvest_spend,
            reinvestment_orders=int(orders * rng.uniform(0, 0.3)),
            reinvestment_revenue=reinvest_revenue,
            reinvestment_roi=reinvest_roi,
            consumption_curve=_curve(rng, anchor_ms, cfg.curve_points, cfg.curve_step_minutes, 1000),
            roi_curve=_curve(rng, anchor_ms, cfg.curve_points, cfg.curve_step_minutes, 5),
        ))
    return materials


def generate_overview(
    rng: np.random.Generator,
    start_ms: int,
    end_ms: int,
    materials: List[Material],
    step_minutes: int = 10,
) -> Dict[str, Curve]:
    """
    One series per stats card from start_ms to end_ms at a fixed step.

    Cards tied to a material field hover around that field's mean so the
    "at or above average" highlight splits the list instead of emptying it.
    """
    step = step_minutes * MINUTE_MS
    timestamps = np.arange(start_ms, end_ms + 1, step, dtype=np.int64)
    overview = {}
    for metric in STAT_METRICS:
        base = metric.base
        if metric.material_field is not None:
            vals = [m.get(metric.material_field) for m in materials]
            vals = [v for v in vals if v is not None]
            if vals:
                base = float(np.mean(vals)) / 1.05
        noise = rng.random(len(timestamps)) * base * 0.1
        overview[metric.id] = tuple(
            (int(ts), float(base + d)) for ts, d in zip(timestamps, noise)
        )
    return overview


def fetch_dashboard(
    start: datetime,
    end: datetime,
    *,
    cfg: Optional[DashboardConfig] = None,
    rng: Optional[np.random.Generator] = None,
    now: Optional[int] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> DashboardData:
    """
    Simulated API call for the [start, end] day.

    Sleeps ``cfg.fetch_latency`` seconds and raises FetchError with
    probability ``cfg.fail_rate``. Curves end at min(end, now).
    """
    cfg = cfg or DashboardConfig()
    rng = rng or np.random.default_rng(cfg.seed)
    now = int(time.time() * 1000) if now is None else now

    start_ms, end_ms = _to_ms(start), _to_ms(end)
    if end_ms < start_ms:
        raise ValueError("end must not be before start")

    sleep(cfg.fetch_latency)
    if cfg.fail_rate and rng.random() < cfg.fail_rate:
        raise FetchError("加载数据时出错: upstream request failed")

    anchor = min(end_ms, now)
    materials = generate_materials(rng, anchor, cfg)
    overview = generate_overview(rng, start_ms, max(start_ms, anchor), materials, cfg.curve_step_minutes)
    logger.info(
        "Fetched %d materials for %s..%s (anchor %s)",
        len(materials), start.isoformat(), end.isoformat(), anchor,
    )
    return DashboardData(
        materials=materials,
        overview=overview,
        start_ms=start_ms,
        end_ms=end_ms,
        fetched_at=now,
    )


def fetch_materials(start: datetime, end: datetime, **kwargs) -> List[Material]:
    """Material list only; same contract as fetch_dashboard."""
    return fetch_dashboard(start, end, **kwargs).materials
