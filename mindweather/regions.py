"""Top-level administrative regions of South Korea and their map anchors.

Region names reach the clustering engine in several spellings: the short
form used as canonical key (``서울``), the official long form (``서울특별시``)
and the English name used by the province boundary layer (``Seoul``).
`normalize_region_name` folds all of them onto the canonical key and
`region_coordinates` returns the fixed (lng, lat) anchor for that key.

The coordinate table is part of the render contract: pins are compared
against these exact decimal-degree values, so they must not be edited.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

Coordinates = Tuple[float, float]

# ---------------------------------------------------------------------------
# Canonical key -> (longitude, latitude)
# ---------------------------------------------------------------------------
REGION_COORDINATES: Dict[str, Coordinates] = {
    # Metropolitan cities
    "서울": (126.978, 37.566),
    "부산": (129.075, 35.180),
    "대구": (128.602, 35.871),
    "인천": (126.705, 37.456),
    "광주": (126.852, 35.160),
    "대전": (127.385, 36.351),
    "울산": (129.311, 35.539),
    "세종": (127.289, 36.480),
    # Provinces
    "경기": (127.018, 37.275),
    "강원": (128.312, 37.555),
    "충북": (127.491, 36.628),
    "충남": (126.800, 36.518),
    "전북": (127.108, 35.716),
    "전남": (126.463, 34.816),
    "경북": (128.888, 36.249),
    "경남": (128.242, 35.238),
    "제주": (126.498, 33.489),
}

# ---------------------------------------------------------------------------
# Official long form -> canonical key
# ---------------------------------------------------------------------------
LONG_FORM_NAMES: Dict[str, str] = {
    "서울특별시": "서울",
    "부산광역시": "부산",
    "대구광역시": "대구",
    "인천광역시": "인천",
    "광주광역시": "광주",
    "대전광역시": "대전",
    "울산광역시": "울산",
    "세종특별자치시": "세종",
    "경기도": "경기",
    "강원도": "강원",
    "충청북도": "충북",
    "충청남도": "충남",
    "전라북도": "전북",
    "전라남도": "전남",
    "경상북도": "경북",
    "경상남도": "경남",
    "제주특별자치도": "제주",
}

# ---------------------------------------------------------------------------
# Canonical key -> English name (province boundary layer, 2018 release)
# ---------------------------------------------------------------------------
ENGLISH_NAMES: Dict[str, str] = {
    "서울": "Seoul",
    "부산": "Busan",
    "대구": "Daegu",
    "인천": "Incheon",
    "광주": "Gwangju",
    "대전": "Daejeon",
    "울산": "Ulsan",
    "세종": "Sejong",
    "경기": "Gyeonggi-do",
    "강원": "Gangwon-do",
    "충북": "Chungcheongbuk-do",
    "충남": "Chungcheongnam-do",
    "전북": "Jeollabuk-do",
    "전남": "Jeollanam-do",
    "경북": "Gyeongsangbuk-do",
    "경남": "Gyeongsangnam-do",
    "제주": "Jeju-do",
}

ALTERNATE_NAMES: Dict[str, str] = {english: key for key, english in ENGLISH_NAMES.items()}

assert set(LONG_FORM_NAMES.values()) == set(REGION_COORDINATES)
assert set(ENGLISH_NAMES) == set(REGION_COORDINATES)


def normalize_region_name(name: str) -> str:
    """Fold a region name onto its canonical short key.

    Lookup order: canonical key, official long form, alternate (English)
    name. Anything else comes back unchanged; callers treat a key without a
    coordinate entry as unresolvable.
    """
    if name in REGION_COORDINATES:
        return name
    if name in LONG_FORM_NAMES:
        return LONG_FORM_NAMES[name]
    if name in ALTERNATE_NAMES:
        return ALTERNATE_NAMES[name]
    return name


def region_coordinates(key: str) -> Optional[Coordinates]:
    return REGION_COORDINATES.get(key)


def english_region_name(name: str) -> str:
    normalized = normalize_region_name(name)
    return ENGLISH_NAMES.get(normalized, name)


class RegionLocator:
    """Object wrapper over the region tables for callers that inject it."""

    def normalize(self, name: str) -> str:
        return normalize_region_name(name)

    def coordinates_of(self, key: str) -> Optional[Coordinates]:
        return region_coordinates(key)

    def is_resolvable(self, name: str) -> bool:
        return region_coordinates(normalize_region_name(name)) is not None
