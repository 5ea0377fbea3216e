"""Structured JSON logging helpers for the clustering runtime.

Every event is one JSON line with a small fixed envelope (`ts`, `level`,
`event`, `component`, `session_id`). Observation payloads carry personal
data (who felt what, where), so user ids, free-text addresses and tags are
masked before anything is written.
"""

from __future__ import annotations

import json
import os
import re
import sys
from datetime import datetime, timezone
from typing import Any, Mapping, TextIO

LOG_EVENT_REQUIRED_FIELDS = (
    "ts",
    "level",
    "event",
    "component",
    "session_id",
)

_STRUCTURED_LOGS_ENV = "MINDWEATHER_STRUCTURED_LOGS"

# Observation fields that identify a person or a place they were at.
# Cluster keys are built from raw address levels.
_SENSITIVE_KEYS_EXACT = frozenset(
    {
        "user_id",
        "userid",
        "address",
        "raw_address",
        "region",
        "tags",
        "latitude",
        "longitude",
        "cluster_keys",
    }
)

_SENSITIVE_KEY_MARKERS = (
    "token",
    "secret",
    "password",
    "api_key",
)

_EMAIL_RE = re.compile(r"\b([A-Za-z0-9._%+\-])([A-Za-z0-9._%+\-]{0,63})@([A-Za-z0-9.\-]+\.[A-Za-z]{2,})\b")


def utc_timestamp() -> str:
    """Return a UTC ISO8601 timestamp with trailing `Z`."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def structured_logs_enabled() -> bool:
    raw = str(os.getenv(_STRUCTURED_LOGS_ENV, "1")).strip().lower()
    return raw not in {"0", "false", "no", "off"}


def _looks_sensitive_key(key: str) -> bool:
    lowered = str(key or "").strip().lower()
    if lowered in _SENSITIVE_KEYS_EXACT:
        return True
    return any(marker in lowered for marker in _SENSITIVE_KEY_MARKERS)


def _mask_email(value: str) -> str:
    def _replace(match: re.Match[str]) -> str:
        return f"{match.group(1)}***@{match.group(3)}"

    return _EMAIL_RE.sub(_replace, value)


def redact_mapping(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Return a recursively redacted copy of `payload`.

    A sensitive key masks its whole value, including nested lists and
    mappings, so a serialized observation never leaks through a sub-object.
    """

    redacted: dict[str, Any] = {}
    for key, value in payload.items():
        if _looks_sensitive_key(str(key)):
            redacted[key] = "[REDACTED]"
        elif isinstance(value, Mapping):
            redacted[key] = redact_mapping(value)
        elif isinstance(value, (list, tuple)):
            redacted[key] = [
                redact_mapping(item) if isinstance(item, Mapping) else _redact_scalar(item)
                for item in value
            ]
        else:
            redacted[key] = _redact_scalar(value)
    return redacted


def _redact_scalar(value: Any) -> Any:
    if isinstance(value, str):
        return _mask_email(value)
    return value


def build_event(
    event: str,
    *,
    level: str = "info",
    component: str = "",
    session_id: str = "",
    **fields: Any,
) -> dict[str, Any]:
    """Build an event payload with the required envelope keys."""
    if not str(event or "").strip():
        raise ValueError("event must be a non-empty string")

    payload: dict[str, Any] = {
        "ts": utc_timestamp(),
        "level": str(level or "info").strip().lower() or "info",
        "event": str(event).strip(),
        "component": str(component or "").strip(),
        "session_id": str(session_id or "").strip(),
    }
    payload.update(fields)

    for required_key in LOG_EVENT_REQUIRED_FIELDS:
        payload.setdefault(required_key, "")

    return payload


def emit_event(payload: Mapping[str, Any], *, stream: TextIO | None = None) -> dict[str, Any]:
    """Redact and write one JSON log line to stderr (or a custom stream)."""
    target = stream or sys.stderr
    redacted_payload = redact_mapping(dict(payload))
    serialized = json.dumps(redacted_payload, ensure_ascii=False, sort_keys=True)
    target.write(serialized + "\n")
    target.flush()
    return redacted_payload


def emit_structured_log(*, event: str, level: str = "info", component: str = "", **fields: Any) -> None:
    """Emit one event without ever raising into the caller."""
    if not structured_logs_enabled():
        return
    try:
        emit_event(build_event(event, level=level, component=component, **fields))
    except Exception:
        # Logging must never break a recomputation.
        return
