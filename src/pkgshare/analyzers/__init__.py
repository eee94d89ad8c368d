"""Version classification, ranking and threshold selection."""

from pkgshare.analyzers.aggregator import DownloadAggregator
from pkgshare.analyzers.classifier import VersionClassifier, classify
from pkgshare.analyzers.filter_state import FilterState
from pkgshare.analyzers.session import QuerySession, SuggestionDebouncer
from pkgshare.analyzers.threshold import ThresholdSelector

__all__ = [
    "DownloadAggregator",
    "FilterState",
    "QuerySession",
    "SuggestionDebouncer",
    "ThresholdSelector",
    "VersionClassifier",
    "classify",
]
