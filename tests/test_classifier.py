"""Tests for version classification."""

import pytest

from pkgshare.analyzers.classifier import (
    VersionClassifier,
    classify,
    major_sort_key,
    tag_for_prerelease,
    version_sort_key,
)
from pkgshare.models.schemas import Tag


class TestClassify:
    def test_stable_version(self):
        info = classify("1.2.3")
        assert info.tag == Tag.STABLE
        assert info.major == "v1"
        assert info.parsed is not None
        assert (info.parsed.major, info.parsed.minor, info.parsed.patch) == (1, 2, 3)
        assert info.parsed.prerelease == ()

    def test_beta_version(self):
        info = classify("2.0.0-beta.1")
        assert info.tag == Tag.BETA
        assert info.major == "v2"
        assert info.parsed.prerelease == ("beta", 1)

    def test_invalid_version(self):
        info = classify("not-a-version")
        assert info.tag == Tag.INVALID
        assert info.major == "unknown"
        assert info.parsed is None
        assert not info.is_valid

    @pytest.mark.parametrize("version", ["", "1.2", "v1.2.3", "1.2.3.4", "latest"])
    def test_unparsable_inputs_never_raise(self, version):
        assert classify(version).tag == Tag.INVALID

    def test_build_metadata_is_parsed(self):
        info = classify("1.0.0-rc.1+build.5")
        assert info.tag == Tag.RC
        assert info.parsed.build == ("build", "5")

    def test_build_metadata_alone_is_stable(self):
        assert classify("1.0.0+20130313144700").tag == Tag.STABLE

    def test_result_is_memoized(self):
        assert classify("4.5.6") is classify("4.5.6")

    def test_classifier_class_delegates(self):
        assert VersionClassifier().classify("0.1.0").major == "v0"


class TestTagDerivation:
    @pytest.mark.parametrize(
        "version,expected",
        [
            ("1.0.0-alpha", Tag.ALPHA),
            ("1.0.0-alpha.3", Tag.ALPHA),
            ("1.0.0-beta", Tag.BETA),
            ("1.0.0-rc.2", Tag.RC),
            ("19.0.0-canary-2a8f9c3-20240101", Tag.CANARY),
            ("1.0.0-next.7", Tag.NEXT),
            ("1.0.0-dev.20240101", Tag.DEV),
            ("1.0.0-snapshot", Tag.SNAPSHOT),
            ("1.0.0-experimental.1", Tag.PRERELEASE),
            ("1.0.0-0", Tag.PRERELEASE),
        ],
    )
    def test_first_identifier_decides(self, version, expected):
        assert classify(version).tag == expected

    def test_priority_order_resolves_overlaps(self):
        # "alpha" is checked before "beta"
        assert tag_for_prerelease(("alpha-beta",)) == Tag.ALPHA
        assert tag_for_prerelease(("betarc",)) == Tag.BETA

    def test_substring_match(self):
        assert tag_for_prerelease(("preview-rc1",)) == Tag.RC

    def test_match_is_case_sensitive(self):
        assert classify("1.0.0-SNAPSHOT").tag == Tag.PRERELEASE
        assert classify("1.0.0-Beta.1").tag == Tag.PRERELEASE

    def test_only_first_identifier_is_inspected(self):
        assert classify("1.0.0-x.beta").tag == Tag.PRERELEASE


class TestSortKeys:
    def test_semver_precedence(self):
        versions = ["1.0.0", "1.0.0-rc.1", "1.0.0-alpha", "1.0.0-alpha.1", "0.9.9", "1.0.0-beta.11", "1.0.0-beta.2"]
        assert sorted(versions, key=version_sort_key) == [
            "0.9.9",
            "1.0.0-alpha",
            "1.0.0-alpha.1",
            "1.0.0-beta.2",
            "1.0.0-beta.11",
            "1.0.0-rc.1",
            "1.0.0",
        ]

    def test_numeric_components_compare_numerically(self):
        assert sorted(["1.10.0", "1.9.0", "1.2.0"], key=version_sort_key) == ["1.2.0", "1.9.0", "1.10.0"]

    def test_unparsable_sort_after_parsable_lexically(self):
        versions = ["zeta", "2.0.0", "alpha", "1.0.0"]
        assert sorted(versions, key=version_sort_key) == ["1.0.0", "2.0.0", "alpha", "zeta"]

    def test_major_labels_sort_numerically(self):
        majors = ["v2", "unknown", "v10", "v9"]
        assert sorted(majors, key=major_sort_key, reverse=True) == ["v10", "v9", "v2", "unknown"]
