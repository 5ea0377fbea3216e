"""Group observations into map clusters at one address granularity.

Cluster keys join the first `granularity` address levels with ``_``; the
top level is always folded onto its canonical region key first, so
``서울특별시 강남구`` and ``서울 강남구`` land in the same cluster.

Placement is a pure function of (key, granularity): the region anchor,
shifted for district/neighborhood clusters by an offset derived from an
additive character-code hash of the key. No randomness, no clock.

Groups whose region has no anchor are dropped and reported, never raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from mindweather.clustering.address import ParsedAddress, parse_address
from mindweather.clustering.aggregation import average_intensity, dominant_emotion
from mindweather.clustering.zoom import Granularity, granularity_label
from mindweather.emotions import EmotionCategory, describe_emotion
from mindweather.observations import Observation
from mindweather.regions import Coordinates, normalize_region_name, region_coordinates

CLUSTER_KEY_SEPARATOR = "_"

# Offset = ((hash % modulus) - center) / 100 * scale, in decimal degrees.
LNG_OFFSET_MODULUS = 100
LNG_OFFSET_CENTER = 50
LNG_OFFSET_SCALE_DEG = 0.5
LAT_OFFSET_MODULUS = 73
LAT_OFFSET_CENTER = 36
LAT_OFFSET_SCALE_DEG = 0.3


@dataclass(frozen=True)
class Cluster:
    key: str
    display_name: str
    granularity: Granularity
    observations: Tuple[Observation, ...]
    dominant_emotion: EmotionCategory
    dominant_count: int
    average_intensity: int
    coordinates: Coordinates

    def to_dict(self) -> Dict[str, Any]:
        """Render payload for the map layer."""
        return {
            "key": self.key,
            "displayName": self.display_name,
            "granularity": int(self.granularity),
            "granularityLabel": granularity_label(self.granularity),
            "coordinates": [self.coordinates[0], self.coordinates[1]],
            "dominantEmotion": describe_emotion(self.dominant_emotion),
            "dominantCount": self.dominant_count,
            "averageIntensity": self.average_intensity,
            "observationCount": len(self.observations),
            "observations": [observation.to_record() for observation in self.observations],
        }


@dataclass
class BuildResult:
    clusters: List[Cluster] = field(default_factory=list)
    dropped_keys: List[str] = field(default_factory=list)


def cluster_key(parsed: ParsedAddress, granularity: int) -> str:
    levels = [normalize_region_name(parsed.level1)]
    if granularity >= Granularity.DISTRICT:
        levels.append(parsed.level2)
    if granularity >= Granularity.NEIGHBORHOOD:
        levels.append(parsed.level3)
    return CLUSTER_KEY_SEPARATOR.join(levels)


def display_name(parsed: ParsedAddress, granularity: int) -> str:
    """Deepest non-empty level at or above `granularity`."""
    for depth in range(int(granularity), 0, -1):
        name = parsed.level(depth)
        if name:
            return name
    return parsed.level1


def key_hash(key: str) -> int:
    """Sum of the UTF-16 code units of `key`.

    UTF-16 rather than code points so keys containing characters outside
    the BMP place their pins where the web client places them.
    """
    encoded = key.encode("utf-16-le")
    return sum(int.from_bytes(encoded[i:i + 2], "little") for i in range(0, len(encoded), 2))


def placement_offset(key: str) -> Coordinates:
    h = key_hash(key)
    offset_lng = ((h % LNG_OFFSET_MODULUS) - LNG_OFFSET_CENTER) / 100 * LNG_OFFSET_SCALE_DEG
    offset_lat = ((h % LAT_OFFSET_MODULUS) - LAT_OFFSET_CENTER) / 100 * LAT_OFFSET_SCALE_DEG
    return offset_lng, offset_lat


def cluster_coordinates(base: Coordinates, key: str, granularity: int) -> Coordinates:
    if granularity <= Granularity.REGION:
        return base
    offset_lng, offset_lat = placement_offset(key)
    return base[0] + offset_lng, base[1] + offset_lat


def build_clusters_with_report(
    observations: Sequence[Observation],
    granularity: int,
) -> BuildResult:
    level = Granularity(granularity)

    groups: Dict[str, List[Observation]] = {}
    first_parsed: Dict[str, ParsedAddress] = {}
    for observation in observations:
        parsed = parse_address(observation.address)
        key = cluster_key(parsed, level)
        if key not in groups:
            groups[key] = []
            first_parsed[key] = parsed
        groups[key].append(observation)

    result = BuildResult()
    for key, members in groups.items():
        parsed = first_parsed[key]
        base = region_coordinates(normalize_region_name(parsed.level1))
        if base is None:
            result.dropped_keys.append(key)
            continue

        dominant = dominant_emotion(members)
        result.clusters.append(
            Cluster(
                key=key,
                display_name=display_name(parsed, level),
                granularity=level,
                observations=tuple(members),
                dominant_emotion=dominant.emotion,
                dominant_count=dominant.count,
                average_intensity=average_intensity(members),
                coordinates=cluster_coordinates(base, key, level),
            )
        )
    return result


def build_clusters(observations: Sequence[Observation], granularity: int) -> List[Cluster]:
    return build_clusters_with_report(observations, granularity).clusters


class ClusterBuilder:
    def build(self, observations: Sequence[Observation], granularity: int) -> List[Cluster]:
        return build_clusters(observations, granularity)
