"""Observation records: one submitted emotion reading tied to an address.

Observations are immutable once built. The submission path and the live
channel deliver them as camelCase JSON-style records; `Observation.from_record`
validates such a record and fails fast on anything the clustering engine
could not interpret (unknown category, intensity outside 1..10, no user).
Addresses are NOT validated here: an empty or unknown address is a normal
input for the clustering engine and is handled there.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional

from mindweather.emotions import EmotionCategory, parse_emotion

MIN_INTENSITY = 1
MAX_INTENSITY = 10


class ObservationRecordError(ValueError):
    """Raised when a wire record cannot be turned into an `Observation`."""


@dataclass(frozen=True)
class Observation:
    user_id: str
    emotion: EmotionCategory
    intensity: int
    address: str
    observed_at: datetime
    tags: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Observation":
        if not isinstance(record, Mapping):
            raise ObservationRecordError("observation record must be a mapping")

        user_id = str(record.get("userId") or "").strip()
        if not user_id:
            raise ObservationRecordError("userId is required")

        try:
            emotion = parse_emotion(record.get("emotion"))
        except ValueError as exc:
            raise ObservationRecordError(str(exc)) from exc

        return cls(
            user_id=user_id,
            emotion=emotion,
            intensity=_parse_intensity(record.get("intensity")),
            address=str(record.get("region") or ""),
            observed_at=_parse_timestamp(record.get("createdAt")),
            tags=str(record.get("tags") or ""),
            latitude=_optional_float(record.get("latitude"), field_name="latitude"),
            longitude=_optional_float(record.get("longitude"), field_name="longitude"),
        )

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "userId": self.user_id,
            "emotion": int(self.emotion),
            "intensity": self.intensity,
            "region": self.address,
            "tags": self.tags,
            "createdAt": self.observed_at.isoformat().replace("+00:00", "Z"),
        }
        if self.latitude is not None:
            record["latitude"] = self.latitude
        if self.longitude is not None:
            record["longitude"] = self.longitude
        return record


def observations_from_records(records: Iterable[Mapping[str, Any]]) -> List[Observation]:
    """Parse a snapshot; the first invalid record aborts with its index."""
    parsed: List[Observation] = []
    for index, record in enumerate(records):
        try:
            parsed.append(Observation.from_record(record))
        except ObservationRecordError as exc:
            raise ObservationRecordError(f"record {index}: {exc}") from exc
    return parsed


def _parse_intensity(raw: Any) -> int:
    if isinstance(raw, bool):
        raise ObservationRecordError("intensity must be an integer")
    try:
        value = float(raw)
    except (TypeError, ValueError, OverflowError):
        raise ObservationRecordError("intensity must be an integer") from None
    if not math.isfinite(value) or value != int(value):
        raise ObservationRecordError("intensity must be an integer")
    intensity = int(value)
    if not MIN_INTENSITY <= intensity <= MAX_INTENSITY:
        raise ObservationRecordError(
            f"intensity must be between {MIN_INTENSITY} and {MAX_INTENSITY}, got {intensity}"
        )
    return intensity


def _parse_timestamp(raw: Any) -> datetime:
    if isinstance(raw, datetime):
        return raw if raw.tzinfo else raw.replace(tzinfo=timezone.utc)
    text = str(raw or "").strip()
    if not text:
        raise ObservationRecordError("createdAt is required")
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ObservationRecordError(f"createdAt is not an ISO8601 timestamp: {raw!r}") from None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _optional_float(raw: Any, *, field_name: str) -> Optional[float]:
    if raw is None or raw == "":
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError, OverflowError):
        raise ObservationRecordError(f"{field_name} must be numeric") from None
    if not math.isfinite(value):
        raise ObservationRecordError(f"{field_name} must be finite")
    return value
