"""
Material filtering: advanced numeric thresholds, name search and the
stats-card highlight filter.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .metrics import recent_metrics
from .models import Material


def parse_threshold(text) -> Optional[float]:
    """
    Parse a threshold input.

    Blank, non-numeric, NaN and infinite inputs return None, which leaves the
    criterion inactive rather than treating it as zero.
    """
    if text is None:
        return None
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        value = float(text)
    else:
        raw = str(text).strip()
        if not raw:
            return None
        try:
            value = float(raw)
        except ValueError:
            return None
    return value if math.isfinite(value) else None


@dataclass(frozen=True)
class FilterCriteria:
    min_spend: Optional[float] = None
    min_roi: Optional[float] = None
    min_recent_spend: Optional[float] = None
    min_recent_roi: Optional[float] = None
    name_contains: Optional[str] = None

    @classmethod
    def from_inputs(cls, spend="", roi="", recent_spend="", recent_roi="", name=""):
        """Build criteria from raw text inputs as typed by the user."""
        return cls(
            min_spend=parse_threshold(spend),
            min_roi=parse_threshold(roi),
            min_recent_spend=parse_threshold(recent_spend),
            min_recent_roi=parse_threshold(recent_roi),
            name_contains=name or None,
        )

    @property
    def needs_window(self) -> bool:
        return self.min_recent_spend is not None or self.min_recent_roi is not None

    @property
    def is_active(self) -> bool:
        return any(
            v is not None for v in (
                self.min_spend, self.min_roi, self.min_recent_spend,
                self.min_recent_roi, self.name_contains,
            )
        )


def _at_least(value, threshold) -> bool:
    if threshold is None:
        return True
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return False
    return value >= threshold


def matches(material: Material, criteria: FilterCriteria, window_minutes: int, now: int) -> bool:
    if criteria.name_contains and criteria.name_contains not in (material.name or ""):
        return False
    if not _at_least(material.spend, criteria.min_spend):
        return False
    if not _at_least(material.roi, criteria.min_roi):
        return False
    if criteria.needs_window:
        recent = recent_metrics(material, window_minutes, now)
        if not _at_least(recent.recent_spend, criteria.min_recent_spend):
            return False
        if not _at_least(recent.recent_roi, criteria.min_recent_roi):
            return False
    return True


def apply_filters(
    materials: Iterable[Material],
    criteria: FilterCriteria,
    window_minutes: int,
    now: int,
) -> List[Material]:
    """Keep materials meeting every active criterion, preserving input order."""
    return [m for m in materials if matches(m, criteria, window_minutes, now)]


def apply_highlights(materials: Iterable[Material], thresholds: dict) -> List[Material]:
    """
    Keep materials whose fields are at or above every given threshold.

    ``thresholds`` maps a Material field name to its lower bound, e.g. the
    overview average of the stats cards the user has switched on.
    """
    materials = list(materials)
    if not thresholds:
        return materials
    return [
        m for m in materials
        if all(_at_least(m.get(f), t) for f, t in thresholds.items())
    ]
