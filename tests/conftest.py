"""Shared fixtures for pkgshare tests."""

import pytest

from pkgshare.models.schemas import VersionRecord


def make_records(*pairs: tuple[str, int]) -> list[VersionRecord]:
    """Build VersionRecords from (version, downloads) pairs."""
    return [VersionRecord(version=v, downloads=d) for v, d in pairs]


@pytest.fixture
def scenario_records() -> list[VersionRecord]:
    return make_records(("3.0.0", 700), ("2.9.0", 200), ("2.8.0", 100))


@pytest.fixture
def mixed_records() -> list[VersionRecord]:
    """Several majors and release channels, in publish order."""
    return make_records(
        ("1.0.0", 50),
        ("1.1.0", 150),
        ("2.0.0-beta.1", 30),
        ("2.0.0-rc.1", 20),
        ("2.0.0", 400),
        ("2.1.0", 250),
        ("3.0.0-canary.4", 10),
        ("not-a-version", 5),
        ("3.0.0-alpha.2", 15),
    )
