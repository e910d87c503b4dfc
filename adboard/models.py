"""
Ad material records
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

Sample = Tuple[int, float]
Curve = Tuple[Sample, ...]


@dataclass(frozen=True)
class Material:
    """
    One video ad material as returned by the metric source.

    Scalar metrics may be None when the source has no value. Curves are
    (timestamp_ms, value) pairs sorted by timestamp; spacing is not fixed.
    """
    id: str
    name: str
    video_url: str = ""
    impressions: Optional[int] = None
    clicks: Optional[int] = None
    ctr: Optional[float] = None
    conversion_rate: Optional[float] = None
    orders: Optional[int] = None
    revenue: Optional[float] = None
    spend: Optional[float] = None
    spend_ratio: Optional[float] = None
    base_spend: Optional[float] = None
    order_cost: Optional[float] = None
    roi: Optional[float] = None
    revenue_ratio: Optional[float] = None
    presale_amount: Optional[float] = None
    presale_orders: Optional[int] = None
    estimated_presale_amount: Optional[float] = None
    coupon_amount: Optional[float] = None
    tool_effectiveness: Optional[str] = None
    reinvestment_spend: Optional[float] = None
    reinvestment_orders: Optional[int] = None
    reinvestment_revenue: Optional[float] = None
    reinvestment_roi: Optional[float] = None
    consumption_curve: Curve = field(default_factory=tuple)
    roi_curve: Curve = field(default_factory=tuple)

    def __post_init__(self):
        # Curves are read-only; normalise lists to tuples
        object.__setattr__(self, "consumption_curve", _as_curve(self.consumption_curve))
        object.__setattr__(self, "roi_curve", _as_curve(self.roi_curve))

    def get(self, name: str):
        return getattr(self, name, None)



def _as_curve(samples) -> Curve:
    return tuple((int(ts), float(v)) for ts, v in samples)

