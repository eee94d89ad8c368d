"""Threshold marking and per-major golden version selection."""

from collections.abc import Sequence

from pkgshare.analyzers.aggregator import total_downloads
from pkgshare.analyzers.classifier import major_sort_key, version_sort_key
from pkgshare.models.schemas import (
    GoldenVersion,
    RankedEntry,
    ThresholdSummary,
    clamp_threshold,
)


class ThresholdSelector:
    """Marks which ranked entries fall inside a cumulative download threshold.

    Entries are taken in rank order until the cumulative downloads reach
    the threshold. The entry that reaches (or jumps past) it is the
    boundary entry and is included; everything after it is excluded,
    except zero-download entries that leave the cumulative total still
    at or below the threshold.
    """

    def mark_threshold(
        self,
        ranked: Sequence[RankedEntry],
        threshold_percent: int,
    ) -> list[RankedEntry]:
        """Return copies of ranked entries with within_threshold and is_boundary set.

        Args:
            ranked: Output of DownloadAggregator.aggregate, in rank order.
            threshold_percent: Cumulative share to cover (50-100).

        Returns:
            New RankedEntry list; the input entries are left untouched.
        """
        total = total_downloads(ranked)
        threshold_absolute = total * clamp_threshold(threshold_percent) / 100

        marked = []
        reached = False
        for entry in ranked:
            accumulated = total > 0 and entry.cumulative_downloads <= threshold_absolute
            is_boundary = False
            if not reached and entry.cumulative_downloads >= threshold_absolute:
                reached = True
                is_boundary = True
            marked.append(
                entry.model_copy(
                    update={
                        "within_threshold": accumulated or is_boundary or not reached,
                        "is_boundary": is_boundary,
                    }
                )
            )
        return marked

    def summarize(
        self,
        ranked: Sequence[RankedEntry],
        threshold_percent: int,
    ) -> ThresholdSummary | None:
        """Report the lowest in-threshold version of each major line.

        Args:
            ranked: Entries already passed through mark_threshold.
            threshold_percent: Threshold the entries were marked with.

        Returns:
            ThresholdSummary with one line per major, newest major first,
            or None when there is no data to summarize.
        """
        if not ranked:
            return None

        lowest: dict[str, RankedEntry] = {}
        for entry in ranked:
            if not entry.within_threshold:
                continue
            current = lowest.get(entry.major)
            if current is None or version_sort_key(entry.version) < version_sort_key(current.version):
                lowest[entry.major] = entry

        lines = [
            GoldenVersion(
                major=major,
                version=entry.version,
                rank=entry.rank,
                downloads=entry.downloads,
                cumulative_share_percent=entry.cumulative_share_percent,
            )
            for major, entry in sorted(lowest.items(), key=lambda item: major_sort_key(item[0]), reverse=True)
        ]
        return ThresholdSummary(
            threshold_percent=clamp_threshold(threshold_percent),
            total_downloads=total_downloads(ranked),
            lines=tuple(lines),
        )
