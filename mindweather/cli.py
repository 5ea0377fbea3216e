"""Offline cluster dump: snapshot file (+ optional live events) -> cluster JSON.

Usage:
  mindweather-clusters --snapshot snapshot.json --zoom 3.2
  mindweather-clusters --snapshot snapshot.json --live live.json --zoom 5

Both input files hold a JSON array of wire records (``userId``, ``emotion``,
``intensity``, ``region``, ``createdAt``). Live records are appended in file
order after the snapshot, exactly like events arriving on the live channel.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Iterable, List

from mindweather.clustering.live_merge import LiveMergeController
from mindweather.clustering.zoom import granularity_label
from mindweather.config import MoodMapSettings
from mindweather.emotions import describe_emotion
from mindweather.observations import Observation, ObservationRecordError, observations_from_records


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="mindweather-clusters",
        description="Cluster an observation snapshot for one zoom level and print the map payload.",
    )
    parser.add_argument("--snapshot", required=True, help="JSON array of observation records")
    parser.add_argument("--live", default=None, help="JSON array of live records appended after the snapshot")
    parser.add_argument("--zoom", type=float, default=None, help="Viewport zoom (default: MINDWEATHER_INITIAL_ZOOM or 1.0)")
    parser.add_argument("--indent", type=int, default=2)
    return parser.parse_args(list(argv) if argv is not None else None)


def _load_records(path: str) -> List[Observation]:
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ObservationRecordError(f"{path}: expected a JSON array of records")
    return observations_from_records(raw)


def build_payload(controller: LiveMergeController) -> dict[str, Any]:
    national = controller.national_dominant()
    return {
        "zoom": controller.zoom,
        "granularity": int(controller.granularity),
        "granularityLabel": granularity_label(controller.granularity),
        "observationCount": len(controller.observations),
        "nationalDominantEmotion": describe_emotion(national.emotion) if national else None,
        "clusters": [cluster.to_dict() for cluster in controller.clusters],
    }


def main(argv: Iterable[str] | None = None) -> int:
    args = _parse_args(argv)
    try:
        settings = MoodMapSettings.from_env()
        snapshot = _load_records(args.snapshot)
        live = _load_records(args.live) if args.live else []
    except (OSError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    zoom = settings.initial_zoom if args.zoom is None else args.zoom
    controller = LiveMergeController(initial_zoom=zoom)
    controller.replace(snapshot)
    for observation in live:
        controller.append(observation)

    print(json.dumps(build_payload(controller), ensure_ascii=False, indent=args.indent))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
