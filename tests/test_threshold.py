"""Tests for threshold marking and golden version selection."""

from pkgshare.analyzers.aggregator import DownloadAggregator
from pkgshare.analyzers.threshold import ThresholdSelector
from pkgshare.models.schemas import FilterSelection, VersionRecord

ALL = FilterSelection(selected_tags=frozenset())


def _ranked(*pairs, selection=ALL):
    records = [VersionRecord(version=v, downloads=d) for v, d in pairs]
    return DownloadAggregator().aggregate(records, selection)


def _marked(threshold, *pairs):
    return ThresholdSelector().mark_threshold(_ranked(*pairs), threshold)


class TestMarkThreshold:
    def test_exact_hit_is_boundary_and_next_excluded(self):
        entries = _marked(90, ("3.0.0", 700), ("2.9.0", 200), ("2.8.0", 100))

        assert [e.within_threshold for e in entries] == [True, True, False]
        assert [e.is_boundary for e in entries] == [False, True, False]

    def test_crossing_entry_is_included(self):
        entries = _marked(80, ("3.0.0", 700), ("2.9.0", 200), ("2.8.0", 100))

        assert [e.within_threshold for e in entries] == [True, True, False]
        assert entries[1].is_boundary
        assert entries[1].cumulative_share_percent > 80

    def test_first_entry_alone_can_cross(self):
        entries = _marked(50, ("2.0.0", 900), ("1.0.0", 60), ("0.9.0", 40))

        assert [e.within_threshold for e in entries] == [True, False, False]
        assert entries[0].is_boundary

    def test_hundred_percent_includes_everything(self):
        entries = _marked(100, ("2.0.0", 500), ("1.0.0", 300), ("0.9.0", 200), ("0.8.0", 0))

        assert all(e.within_threshold for e in entries)
        assert sum(e.is_boundary for e in entries) == 1

    def test_exactly_one_boundary(self):
        pairs = [(f"1.{i}.0", d) for i, d in enumerate([40, 30, 10, 9, 5, 3, 2, 1])]
        for threshold in range(50, 100):
            entries = _marked(threshold, *pairs)
            assert sum(e.is_boundary for e in entries) == 1
            within = [e.within_threshold for e in entries]
            # within entries form a prefix of the ranking
            assert within == sorted(within, reverse=True)

    def test_zero_total_marks_only_first(self):
        entries = _marked(90, ("1.0.0", 0), ("1.1.0", 0), ("1.2.0", 0))

        assert [e.within_threshold for e in entries] == [True, False, False]
        assert entries[0].is_boundary

    def test_empty_input(self):
        assert ThresholdSelector().mark_threshold([], 90) == []

    def test_input_entries_not_mutated(self):
        ranked = _ranked(("3.0.0", 700), ("2.9.0", 200))
        marked = ThresholdSelector().mark_threshold(ranked, 90)

        assert not any(e.within_threshold for e in ranked)
        assert all(e.within_threshold for e in marked)

    def test_out_of_range_threshold_is_clamped(self):
        low = _marked(10, ("2.0.0", 40), ("1.0.0", 35), ("0.9.0", 25))
        clamped = _marked(50, ("2.0.0", 40), ("1.0.0", 35), ("0.9.0", 25))

        assert low == clamped

    def test_idempotent(self):
        pairs = [("3.0.0", 700), ("2.9.0", 200), ("2.8.0", 100)]

        assert _marked(90, *pairs) == _marked(90, *pairs)


class TestSummarize:
    def test_empty_is_no_data(self):
        assert ThresholdSelector().summarize([], 90) is None

    def test_lowest_version_per_major(self):
        selector = ThresholdSelector()
        marked = selector.mark_threshold(
            _ranked(
                ("2.1.0", 400),
                ("1.4.0", 250),
                ("2.0.0", 150),
                ("1.2.0", 100),
                ("1.0.0", 60),
                ("0.9.0", 40),
            ),
            90,
        )
        summary = selector.summarize(marked, 90)

        assert summary.threshold_percent == 90
        assert summary.total_downloads == 1000
        assert [(line.major, line.version) for line in summary.lines] == [("v2", "2.0.0"), ("v1", "1.2.0")]

    def test_uses_semver_precedence_not_string_order(self):
        selector = ThresholdSelector()
        marked = selector.mark_threshold(
            _ranked(("1.10.0", 500), ("1.9.0", 300), ("1.0.0-rc.1", 150), ("1.0.0", 50)),
            100,
        )
        summary = selector.summarize(marked, 100)

        assert [line.version for line in summary.lines] == ["1.0.0-rc.1"]

    def test_majors_ordered_newest_first_and_unknown_last(self):
        selector = ThresholdSelector()
        marked = selector.mark_threshold(
            _ranked(("9.0.0", 100), ("10.0.0", 100), ("weird", 100), ("2.0.0", 100)),
            100,
        )
        summary = selector.summarize(marked, 100)

        assert [line.major for line in summary.lines] == ["v10", "v9", "v2", "unknown"]

    def test_unparsable_versions_compare_lexically(self):
        selector = ThresholdSelector()
        marked = selector.mark_threshold(_ranked(("nightly", 60), ("beta-build", 40)), 100)
        summary = selector.summarize(marked, 100)

        assert [(line.major, line.version) for line in summary.lines] == [("unknown", "beta-build")]

    def test_excluded_entries_ignored(self):
        selector = ThresholdSelector()
        marked = selector.mark_threshold(_ranked(("3.0.0", 700), ("2.9.0", 200), ("2.8.0", 100)), 90)
        summary = selector.summarize(marked, 90)

        assert [(line.major, line.version, line.rank) for line in summary.lines] == [("v3", "3.0.0", 1), ("v2", "2.9.0", 2)]

    def test_zero_total_reports_first_entry(self):
        selector = ThresholdSelector()
        marked = selector.mark_threshold(_ranked(("1.0.0", 0), ("2.0.0", 0)), 90)
        summary = selector.summarize(marked, 90)

        assert summary.total_downloads == 0
        assert [line.version for line in summary.lines] == ["1.0.0"]
