"""Geospatial emotion clustering engine."""

from .address import AddressParser, ParsedAddress, parse_address
from .aggregation import DominantEmotion, EmotionAggregator, dominant_emotion, national_dominant_emotion
from .builder import Cluster, ClusterBuilder, build_clusters
from .live_merge import LiveMergeController
from .zoom import Granularity, ZoomGranularityResolver, focus_on_region, resolve_granularity

__all__ = [
    "AddressParser",
    "ParsedAddress",
    "parse_address",
    "DominantEmotion",
    "EmotionAggregator",
    "dominant_emotion",
    "national_dominant_emotion",
    "Cluster",
    "ClusterBuilder",
    "build_clusters",
    "LiveMergeController",
    "Granularity",
    "ZoomGranularityResolver",
    "focus_on_region",
    "resolve_granularity",
]
