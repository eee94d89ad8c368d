"""Filter selection holder that recomputes the ranked view on every change."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pkgshare.analyzers.aggregator import DownloadAggregator, total_downloads
from pkgshare.analyzers.classifier import VersionClassifier, major_sort_key
from pkgshare.analyzers.threshold import ThresholdSelector
from pkgshare.models.schemas import (
    FilterSelection,
    RankedEntry,
    Tag,
    ThresholdSummary,
    VersionRecord,
)

logger = logging.getLogger(__name__)


class FilterState:
    """Holds the records and filter selection of the current query.

    Derived views are never updated piecemeal: any change to the records
    or the selection recomputes the ranked entries and the threshold
    summary from scratch.

    Usage:
        state = FilterState()
        state.set_records(records)
        state.set_filter(FilterSelection(selected_tags=frozenset({Tag.STABLE})))
        for entry in state.get_ranked_entries():
            ...
        summary = state.get_threshold_summary()  # None means no data
    """

    def __init__(
        self,
        selection: FilterSelection | None = None,
        classifier: VersionClassifier | None = None,
    ) -> None:
        self.classifier = classifier or VersionClassifier()
        self.aggregator = DownloadAggregator(self.classifier)
        self.selector = ThresholdSelector()
        self._selection = selection or FilterSelection()
        self._records: tuple[VersionRecord, ...] = ()
        self._generation = 0
        self._ranked: tuple[RankedEntry, ...] = ()
        self._summary: ThresholdSummary | None = None

    @property
    def selection(self) -> FilterSelection:
        return self._selection

    @property
    def records(self) -> tuple[VersionRecord, ...]:
        return self._records

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def total_downloads(self) -> int:
        """Downloads of the filtered set."""
        return total_downloads(self._ranked)

    def begin_load(self) -> int:
        """Start a new load and return its generation token.

        Records later committed with an older token are discarded.
        """
        self._generation += 1
        return self._generation

    def set_records(
        self,
        records: Iterable[VersionRecord],
        generation: int | None = None,
    ) -> bool:
        """Replace the source records and recompute.

        Args:
            records: Version records in registry publish order.
            generation: Token from begin_load; None commits unconditionally.

        Returns:
            False if the records belong to a superseded load and were dropped.
        """
        if generation is not None and generation != self._generation:
            logger.debug(f"Discarding stale records (generation {generation}, current {self._generation})")
            return False
        self._records = tuple(records)
        self._recompute()
        return True

    def set_filter(self, selection: FilterSelection) -> None:
        """Replace the filter selection and recompute."""
        self._selection = selection
        self._recompute()

    def toggle_tag(self, tag: Tag) -> None:
        self.set_filter(
            self._selection.model_copy(
                update={"selected_tags": self._selection.selected_tags ^ {tag}}
            )
        )

    def toggle_major(self, major: str) -> None:
        self.set_filter(
            self._selection.model_copy(
                update={"selected_majors": self._selection.selected_majors ^ {major}}
            )
        )

    def set_threshold(self, threshold_percent: int) -> None:
        # model_copy does not validate; the constructor clamps
        self.set_filter(
            FilterSelection(
                selected_tags=self._selection.selected_tags,
                selected_majors=self._selection.selected_majors,
                threshold_percent=threshold_percent,
            )
        )

    def get_ranked_entries(self) -> list[RankedEntry]:
        return list(self._ranked)

    def get_threshold_summary(self) -> ThresholdSummary | None:
        return self._summary

    def available_tags(self) -> list[Tag]:
        """Tags present in the current records, in Tag declaration order."""
        present = {self.classifier.classify(r.version).tag for r in self._records}
        return [tag for tag in Tag if tag in present]

    def available_majors(self) -> list[str]:
        """Major lines present in the current records, newest first."""
        present = {self.classifier.classify(r.version).major for r in self._records}
        return sorted(present, key=major_sort_key, reverse=True)

    def _recompute(self) -> None:
        threshold = self._selection.threshold_percent
        ranked = self.aggregator.aggregate(self._records, self._selection)
        marked = self.selector.mark_threshold(ranked, threshold)
        self._ranked = tuple(marked)
        self._summary = self.selector.summarize(marked, threshold)
        logger.debug(
            f"Recomputed {len(marked)} entries at {threshold}% "
            f"({len(self._summary.lines) if self._summary else 0} major lines)"
        )
