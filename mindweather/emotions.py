"""Emotion categories and their display tables.

The ten categories travel over the wire as integers 0..9. Every lookup table
below is keyed by `EmotionCategory` and covers all ten members; the module
asserts that at import time so a new category cannot ship half-mapped.

Legend:
  negative = the category renders as "bad weather" on the map
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict


class EmotionCategory(IntEnum):
    JOY = 0
    SADNESS = 1
    ANGER = 2
    ANXIETY = 3
    FATIGUE = 4
    CALM = 5
    EXCITEMENT = 6
    BOREDOM = 7
    LONELINESS = 8
    DEPRESSION = 9


@dataclass(frozen=True)
class WeatherStyle:
    icon: str
    color: str
    glow_color: str
    animation: str
    description: str


# ---------------------------------------------------------------------------
# Labels (Korean)
# ---------------------------------------------------------------------------
EMOTION_LABELS: Dict[EmotionCategory, str] = {
    EmotionCategory.JOY: "기쁨",
    EmotionCategory.SADNESS: "슬픔",
    EmotionCategory.ANGER: "분노",
    EmotionCategory.ANXIETY: "불안",
    EmotionCategory.FATIGUE: "피로",
    EmotionCategory.CALM: "평온",
    EmotionCategory.EXCITEMENT: "설렘",
    EmotionCategory.BOREDOM: "무료함",
    EmotionCategory.LONELINESS: "외로움",
    EmotionCategory.DEPRESSION: "우울",
}

# ---------------------------------------------------------------------------
# Icons
# ---------------------------------------------------------------------------
EMOTION_ICONS: Dict[EmotionCategory, str] = {
    EmotionCategory.JOY: "☀️",
    EmotionCategory.SADNESS: "🌧️",
    EmotionCategory.ANGER: "⛈️",
    EmotionCategory.ANXIETY: "🌪️",
    EmotionCategory.FATIGUE: "🌫️",
    EmotionCategory.CALM: "🌤️",
    EmotionCategory.EXCITEMENT: "✨",
    EmotionCategory.BOREDOM: "😶",
    EmotionCategory.LONELINESS: "🍂",
    EmotionCategory.DEPRESSION: "🕳️",
}

# ---------------------------------------------------------------------------
# Pin colours
# ---------------------------------------------------------------------------
EMOTION_COLORS: Dict[EmotionCategory, str] = {
    EmotionCategory.JOY: "#FFD93D",
    EmotionCategory.SADNESS: "#6B7FDE",
    EmotionCategory.ANGER: "#FF6B6B",
    EmotionCategory.ANXIETY: "#9B59B6",
    EmotionCategory.FATIGUE: "#95A5A6",
    EmotionCategory.CALM: "#4ECDC4",
    EmotionCategory.EXCITEMENT: "#F472B6",
    EmotionCategory.BOREDOM: "#A8A29E",
    EmotionCategory.LONELINESS: "#6366F1",
    EmotionCategory.DEPRESSION: "#1E293B",
}

EMOTION_IS_NEGATIVE: Dict[EmotionCategory, bool] = {
    EmotionCategory.JOY: False,
    EmotionCategory.SADNESS: True,
    EmotionCategory.ANGER: True,
    EmotionCategory.ANXIETY: True,
    EmotionCategory.FATIGUE: True,
    EmotionCategory.CALM: False,
    EmotionCategory.EXCITEMENT: False,
    EmotionCategory.BOREDOM: True,
    EmotionCategory.LONELINESS: True,
    EmotionCategory.DEPRESSION: True,
}

# ---------------------------------------------------------------------------
# Weather metaphor per category
# ---------------------------------------------------------------------------
EMOTION_WEATHER: Dict[EmotionCategory, WeatherStyle] = {
    EmotionCategory.JOY: WeatherStyle("Sun", "#FFD93D", "rgba(255, 217, 61, 0.7)", "pulsing", "맑은 햇살"),
    EmotionCategory.SADNESS: WeatherStyle("Rain", "#60A5FA", "rgba(96, 165, 250, 0.5)", "wavering", "비"),
    EmotionCategory.ANGER: WeatherStyle("Storm", "#EF4444", "rgba(239, 68, 68, 0.7)", "flashing", "폭풍우"),
    EmotionCategory.ANXIETY: WeatherStyle("Tornado", "#A855F7", "rgba(168, 85, 247, 0.6)", "swirling", "회오리"),
    EmotionCategory.FATIGUE: WeatherStyle("Snail", "#94A3B8", "rgba(148, 163, 184, 0.5)", "wavering", "달팽이"),
    EmotionCategory.CALM: WeatherStyle("Breeze", "#34D399", "rgba(52, 211, 153, 0.5)", "floating", "산들바람"),
    EmotionCategory.EXCITEMENT: WeatherStyle("Rainbow", "#F472B6", "rgba(244, 114, 182, 0.6)", "sparkling", "무지개"),
    EmotionCategory.BOREDOM: WeatherStyle("Cloud", "#A8A29E", "rgba(168, 162, 158, 0.5)", "spinning_slow", "흐림"),
    EmotionCategory.LONELINESS: WeatherStyle("Snow", "#6366F1", "rgba(99, 102, 241, 0.5)", "drifting", "눈"),
    EmotionCategory.DEPRESSION: WeatherStyle("Abyss", "#1E293B", "rgba(30, 41, 59, 0.8)", "contracting", "심연"),
}

for _table in (EMOTION_LABELS, EMOTION_ICONS, EMOTION_COLORS, EMOTION_IS_NEGATIVE, EMOTION_WEATHER):
    assert set(_table) == set(EmotionCategory), "emotion table is not exhaustive"


def parse_emotion(value: Any) -> EmotionCategory:
    """Resolve a wire value to an `EmotionCategory`.

    Accepts the integer wire value, its decimal string form or the member
    name in any case (``"joy"``, ``"SADNESS"``).

    Raises:
        ValueError: unknown category
    """
    if isinstance(value, EmotionCategory):
        return value
    if isinstance(value, bool) or value is None:
        raise ValueError(f"unknown emotion category: {value!r}")
    if isinstance(value, int):
        try:
            return EmotionCategory(value)
        except ValueError:
            raise ValueError(f"unknown emotion category: {value!r}") from None

    text = str(value).strip()
    if text.lstrip("-").isdigit():
        return parse_emotion(int(text))
    try:
        return EmotionCategory[text.upper()]
    except KeyError:
        raise ValueError(f"unknown emotion category: {value!r}") from None


def describe_emotion(emotion: EmotionCategory) -> Dict[str, Any]:
    """Render payload fragment for one category."""
    weather = EMOTION_WEATHER[emotion]
    return {
        "value": int(emotion),
        "name": emotion.name.lower(),
        "label": EMOTION_LABELS[emotion],
        "icon": EMOTION_ICONS[emotion],
        "color": EMOTION_COLORS[emotion],
        "negative": EMOTION_IS_NEGATIVE[emotion],
        "weather": weather.icon,
        "weatherDescription": weather.description,
    }
