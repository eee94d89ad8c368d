"""Data models and schemas."""

from pkgshare.models.schemas import (
    Classification,
    FilterSelection,
    GoldenVersion,
    PackageSuggestion,
    PackageVersions,
    ParsedVersion,
    RankedEntry,
    Tag,
    ThresholdSummary,
    VersionRecord,
)

__all__ = [
    "Classification",
    "FilterSelection",
    "GoldenVersion",
    "PackageSuggestion",
    "PackageVersions",
    "ParsedVersion",
    "RankedEntry",
    "Tag",
    "ThresholdSummary",
    "VersionRecord",
]
