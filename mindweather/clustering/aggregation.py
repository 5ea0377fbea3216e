"""Dominant emotion selection for a group of observations.

Tie-break order (changes pin colour on the map, keep it exact):
  1. higher count wins
  2. equal count: higher summed intensity wins
  3. equal on both: the category seen first in input order stays
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from mindweather.emotions import EmotionCategory
from mindweather.observations import Observation


@dataclass(frozen=True)
class EmotionTally:
    emotion: EmotionCategory
    count: int
    total_intensity: int


@dataclass(frozen=True)
class DominantEmotion:
    emotion: EmotionCategory
    count: int
    total_intensity: int


def tally_emotions(observations: Sequence[Observation]) -> List[EmotionTally]:
    """Per-category (count, summed intensity), ordered by first appearance."""
    counts: Dict[EmotionCategory, List[int]] = {}
    for observation in observations:
        stat = counts.setdefault(observation.emotion, [0, 0])
        stat[0] += 1
        stat[1] += observation.intensity
    return [EmotionTally(emotion, count, total) for emotion, (count, total) in counts.items()]


def dominant_emotion(observations: Sequence[Observation]) -> DominantEmotion:
    """Pick the dominant category of a non-empty group.

    Raises:
        ValueError: `observations` is empty
    """
    if not observations:
        raise ValueError("dominant emotion needs at least one observation")

    best: Optional[EmotionTally] = None
    for tally in tally_emotions(observations):
        if best is None or tally.count > best.count:
            best = tally
        elif tally.count == best.count and tally.total_intensity > best.total_intensity:
            best = tally

    assert best is not None
    return DominantEmotion(best.emotion, best.count, best.total_intensity)


def average_intensity(observations: Sequence[Observation]) -> int:
    """Mean intensity over all members, rounded half up."""
    if not observations:
        raise ValueError("average intensity needs at least one observation")
    total = sum(observation.intensity for observation in observations)
    # floor division keeps the half-up rule exact for integer sums
    return (2 * total + len(observations)) // (2 * len(observations))


def national_dominant_emotion(observations: Sequence[Observation]) -> Optional[DominantEmotion]:
    """Most frequent category across the whole working set.

    Count only: on a tied count the category seen first stays, whatever
    the intensities. `None` for an empty set.
    """
    best: Optional[EmotionTally] = None
    for tally in tally_emotions(observations):
        if best is None or tally.count > best.count:
            best = tally
    if best is None:
        return None
    return DominantEmotion(best.emotion, best.count, best.total_intensity)


class EmotionAggregator:
    def dominant(self, observations: Sequence[Observation]) -> DominantEmotion:
        return dominant_emotion(observations)
