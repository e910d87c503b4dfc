from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields

logger = logging.getLogger(__name__)


# =============================================================================
# Fixed UI constants
# =============================================================================

PAGE_SIZES = (10, 20, 30, 40, 50)
MIN_COLUMN_WIDTH = 50
MAX_COLUMN_WIDTH = 500
DEFAULT_COLUMN_WIDTH = 150
PINNED_COLUMNS = ("preview", "actions")

MINUTE_MS = 60_000


# =============================================================================
# Tunables
# =============================================================================

@dataclass
class DashboardConfig:
    # Mock source
    material_count: int = 30
    curve_points: int = 144          # 24 hours at the default step
    curve_step_minutes: int = 10
    fetch_latency: float = 1.0       # seconds
    fail_rate: float = 0.0           # probability a fetch raises FetchError
    seed: int | None = None

    # View defaults
    default_window: int = 30
    default_page_size: int = 10


_ENV_PREFIX = "ADBOARD_"


def _coerce(raw: str, current):
    if isinstance(current, bool):
        return raw.strip().lower() in ("1", "true", "yes", "y")
    if isinstance(current, int) or current is None:
        return int(raw)
    if isinstance(current, float):
        return float(raw)
    return raw


def load_config(environ=None) -> DashboardConfig:
    """
    Build a DashboardConfig from ADBOARD_* environment variables.

    Unknown variables are ignored; values that do not parse keep the default
    and log a warning.
    """
    environ = os.environ if environ is None else environ
    cfg = DashboardConfig()

    for f in fields(cfg):
        key = _ENV_PREFIX + f.name.upper()
        raw = environ.get(key)
        if raw is None or raw == "":
            continue
        try:
            setattr(cfg, f.name, _coerce(raw, getattr(cfg, f.name)))
        except ValueError:
            logger.warning("Ignoring %s=%r: not a valid %s", key, raw, f.type)

    if cfg.default_page_size not in PAGE_SIZES:
        logger.warning("default_page_size %s not in %s, using 10", cfg.default_page_size, PAGE_SIZES)
        cfg.default_page_size = 10
    if cfg.default_window <= 0:
        logger.warning("default_window must be positive, using 30")
        cfg.default_window = 30
    cfg.fail_rate = min(1.0, max(0.0, cfg.fail_rate))

    return cfg
