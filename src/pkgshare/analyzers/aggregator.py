"""Ranks version download records and computes download shares."""

import logging
from collections.abc import Iterable

from pkgshare.analyzers.classifier import VersionClassifier
from pkgshare.models.schemas import FilterSelection, RankedEntry, VersionRecord

logger = logging.getLogger(__name__)


def percent_of(part: int, total: int) -> float:
    """Return part as a percentage of total, 0 when total is 0."""
    if total <= 0:
        return 0.0
    return min(part / total * 100, 100.0)


class DownloadAggregator:
    """Filters, sorts and ranks version records by downloads.

    Ranking steps:
    1. Keep records whose tag and major line are selected (an empty
       selection applies no filtering)
    2. Stable sort by downloads descending, so equal counts keep the
       registry publish order
    3. Annotate rank, share of total, running total and cumulative share
    """

    def __init__(self, classifier: VersionClassifier | None = None) -> None:
        self.classifier = classifier or VersionClassifier()

    def filter_records(
        self,
        records: Iterable[VersionRecord],
        selection: FilterSelection,
    ) -> list[VersionRecord]:
        """Return the records matching the selected tags and majors, in input order."""
        kept = []
        for record in records:
            info = self.classifier.classify(record.version)
            if selection.selected_tags and info.tag not in selection.selected_tags:
                continue
            if selection.selected_majors and info.major not in selection.selected_majors:
                continue
            kept.append(record)
        return kept

    def aggregate(
        self,
        records: Iterable[VersionRecord],
        selection: FilterSelection,
    ) -> list[RankedEntry]:
        """Build the ranked, annotated sequence for a filter selection.

        Args:
            records: Version records in registry publish order.
            selection: Active filter selection.

        Returns:
            RankedEntry list in rank order (rank 1 = most downloaded).
            within_threshold is left unset; see ThresholdSelector.
        """
        filtered = self.filter_records(records, selection)
        ordered = sorted(filtered, key=lambda r: r.downloads, reverse=True)
        total = sum(r.downloads for r in ordered)

        entries = []
        cumulative = 0
        for rank, record in enumerate(ordered, 1):
            info = self.classifier.classify(record.version)
            cumulative += record.downloads
            entries.append(
                RankedEntry(
                    version=record.version,
                    downloads=record.downloads,
                    published_date=record.published_date,
                    is_latest=record.is_latest,
                    tag=info.tag,
                    major=info.major,
                    rank=rank,
                    share_percent=percent_of(record.downloads, total),
                    cumulative_downloads=cumulative,
                    cumulative_share_percent=percent_of(cumulative, total),
                )
            )

        logger.debug(f"Ranked {len(entries)} versions with {total} total downloads")
        return entries


def total_downloads(entries: Iterable[RankedEntry]) -> int:
    """Total downloads of a ranked sequence (the last cumulative value)."""
    total = 0
    for entry in entries:
        total = entry.cumulative_downloads
    return total
