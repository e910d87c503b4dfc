"""
Overview series behind the stats cards
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, Optional

import pandas as pd

from .metrics import window_samples
from .models import Curve
from .utils import fmt_currency, fmt_number, fmt_percent


@dataclass(frozen=True)
class StatMetric:
    id: str
    label: str
    kind: str                        # 'percent' | 'currency' | 'plain'
    material_field: Optional[str] = None
    base: float = 1.0                # mock level when no material field drives it


STAT_METRICS = (
    StatMetric("total_spend", "全域素材消耗金额", "currency", "spend", 100_000),
    StatMetric("total_revenue", "全域素材成交金额", "currency", "revenue", 150_000),
    StatMetric("total_roi", "全域素材ROI", "plain", "roi", 1.5),
    StatMetric("material_conversion_rate", "素材成交占比", "percent", "revenue_ratio", 0.5),
    StatMetric("live_stream_revenue", "直播间画面成交金额", "currency", None, 50_000),
    StatMetric("live_stream_spend", "直播间画面消耗金额", "currency", None, 30_000),
    StatMetric("live_stream_roi", "直播间画面ROI", "plain", None, 1.67),
    StatMetric("ctr", "点击率 (CTR)", "percent", "ctr", 0.05),
    StatMetric("conversion_rate", "转化率", "percent", "conversion_rate", 0.02),
    StatMetric("cpm", "千次展示费用 (CPM)", "currency", None, 10),
)

STAT_METRICS_BY_ID: Dict[str, StatMetric] = {m.id: m for m in STAT_METRICS}


def format_stat(metric: StatMetric, value) -> str:
    if metric.kind == "percent":
        return fmt_percent(value)
    if metric.kind == "currency":
        return fmt_currency(value)
    return fmt_number(value, 2)


def latest_value(series: Curve) -> Optional[float]:
    if not series:
        return None
    return series[-1][1]


def series_average(series: Curve) -> Optional[float]:
    if not series:
        return None
    return float(pd.Series([v for _, v in series]).mean())


def series_frame(series: Curve, window_minutes: Optional[int] = None, now: Optional[int] = None) -> pd.DataFrame:
    """Series as a timestamp/value frame, optionally limited to the window."""
    samples = list(series)
    if window_minutes is not None and now is not None:
        samples = window_samples(series, window_minutes, now)
    df = pd.DataFrame(samples, columns=["timestamp", "value"])
    df["time"] = (
        pd.to_datetime(df["timestamp"].astype("int64"), unit="ms", utc=True)
        .dt.tz_convert(datetime.now().astimezone().tzinfo)
    )
    return df


def highlight_thresholds(active: Iterable[str], overview: Dict[str, Curve]) -> Dict[str, float]:
    """
    Material-field lower bounds for the cards switched on as filters.

    Each active card contributes the average of its overview series; cards
    without a material counterpart or without samples are skipped.
    """
    thresholds = {}
    for metric_id in active:
        metric = STAT_METRICS_BY_ID.get(metric_id)
        if metric is None or metric.material_field is None:
            continue
        avg = series_average(overview.get(metric_id, ()))
        if avg is not None:
            thresholds[metric.material_field] = avg
    return thresholds
