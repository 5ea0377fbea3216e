"""Runtime settings read from the environment.

Only the host-facing knobs are configurable. Zoom thresholds and pin
offsets are fixed module constants.

Durations accept plain seconds (``30``) or a unit suffix ``s``/``m``/``h``
(``30s``, ``2m``); invalid values raise `ValueError` at startup.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Any

SNAPSHOT_POLL_INTERVAL_ENV = "MINDWEATHER_SNAPSHOT_POLL_INTERVAL"
INITIAL_ZOOM_ENV = "MINDWEATHER_INITIAL_ZOOM"

DEFAULT_SNAPSHOT_POLL_INTERVAL_SECONDS = 30.0
DEFAULT_INITIAL_ZOOM = 1.0

_UNIT_TO_SECONDS = {"s": 1.0, "m": 60.0, "h": 3600.0}


def parse_interval_seconds(raw: Any, *, field_name: str = "interval") -> float:
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        value = float(raw)
    else:
        text = str(raw or "").strip().lower()
        if not text:
            raise ValueError(f"{field_name} must be set")
        unit = "s"
        if text[-1].isalpha():
            unit, text = text[-1], text[:-1].strip()
        if unit not in _UNIT_TO_SECONDS:
            raise ValueError(f"{field_name} has unknown unit '{unit}' (allowed: h, m, s)")
        try:
            value = float(text) * _UNIT_TO_SECONDS[unit]
        except ValueError:
            raise ValueError(f"{field_name} must be seconds or a duration like '30s'/'2m'") from None

    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{field_name} must be a finite duration > 0")
    return value


def _parse_zoom(raw: Any) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ValueError(f"{INITIAL_ZOOM_ENV} must be numeric, got {raw!r}") from None
    if not math.isfinite(value):
        raise ValueError(f"{INITIAL_ZOOM_ENV} must be finite")
    return value


@dataclass(frozen=True)
class MoodMapSettings:
    snapshot_poll_interval_seconds: float = DEFAULT_SNAPSHOT_POLL_INTERVAL_SECONDS
    initial_zoom: float = DEFAULT_INITIAL_ZOOM

    @classmethod
    def from_env(cls) -> "MoodMapSettings":
        raw_interval = str(os.getenv(SNAPSHOT_POLL_INTERVAL_ENV, "")).strip()
        raw_zoom = str(os.getenv(INITIAL_ZOOM_ENV, "")).strip()
        return cls(
            snapshot_poll_interval_seconds=(
                parse_interval_seconds(raw_interval, field_name=SNAPSHOT_POLL_INTERVAL_ENV)
                if raw_interval
                else DEFAULT_SNAPSHOT_POLL_INTERVAL_SECONDS
            ),
            initial_zoom=_parse_zoom(raw_zoom) if raw_zoom else DEFAULT_INITIAL_ZOOM,
        )
