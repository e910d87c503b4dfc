"""
Look-back window presets and parsing
"""
from __future__ import annotations

PRESETS = {
    30: "近30分钟",
    60: "近1小时",
    120: "近2小时",
    180: "近3小时",
    360: "近6小时",
    720: "近12小时",
}


def parse_custom_minutes(text) -> int | None:
    """Parse a user-entered window; anything but a positive integer is None."""
    if text is None:
        return None
    try:
        minutes = int(str(text).strip())
    except ValueError:
        return None
    return minutes if minutes > 0 else None


def window_label(minutes: int) -> str:
    return PRESETS.get(minutes, f"近{minutes}分钟")


def window_options(current: int | None = None) -> list[int]:
    """Preset minutes, plus the current value when it is a custom window."""
    options = list(PRESETS)
    if current is not None and current not in PRESETS:
        options.append(current)
    return options
