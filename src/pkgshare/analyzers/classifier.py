"""Semantic version parsing and release tag classification."""

import logging
from functools import lru_cache

import semantic_version

from pkgshare.models.schemas import UNKNOWN_MAJOR, Classification, ParsedVersion, Tag

logger = logging.getLogger(__name__)

# Checked in order against the first prerelease identifier; first match wins.
TAG_PRIORITY = (
    Tag.ALPHA,
    Tag.BETA,
    Tag.RC,
    Tag.CANARY,
    Tag.NEXT,
    Tag.DEV,
    Tag.SNAPSHOT,
)


def parse_version(version: str) -> semantic_version.Version | None:
    """Parse a version string with strict semver grammar, None if unparsable."""
    try:
        return semantic_version.Version(version)
    except (TypeError, ValueError):
        return None


def _prerelease_token(token: str) -> str | int:
    return int(token) if token.isdigit() else token


def tag_for_prerelease(prerelease: tuple[str, ...]) -> Tag:
    """Derive the release tag from a prerelease identifier list."""
    if not prerelease:
        return Tag.STABLE
    first = str(prerelease[0])
    for tag in TAG_PRIORITY:
        if tag.value in first:
            return tag
    return Tag.PRERELEASE


@lru_cache(maxsize=4096)
def classify(version: str) -> Classification:
    """Classify a version string into parsed form, release tag and major line.

    Unparsable input never raises: it is reported with tag ``invalid`` and
    major ``unknown``.

    Args:
        version: Raw version string as published on the registry.

    Returns:
        Classification with the parsed version (None if unparsable).
    """
    parsed = parse_version(version)
    if parsed is None:
        logger.debug(f"Unparsable version {version!r}, classified as invalid")
        return Classification(parsed=None, tag=Tag.INVALID, major=UNKNOWN_MAJOR)

    return Classification(
        parsed=ParsedVersion(
            major=parsed.major,
            minor=parsed.minor,
            patch=parsed.patch,
            prerelease=tuple(_prerelease_token(t) for t in parsed.prerelease),
            build=tuple(parsed.build),
        ),
        tag=tag_for_prerelease(parsed.prerelease),
        major=f"v{parsed.major}",
    )


def version_sort_key(version: str) -> tuple:
    """Ascending sort key: semver precedence, unparsable versions last by plain string order."""
    parsed = parse_version(version)
    if parsed is None:
        return (1, version)
    return (0, parsed)


def major_sort_key(major: str) -> tuple:
    """Ascending sort key for major-line labels (``v10`` after ``v9``, ``unknown`` first)."""
    if major.startswith("v") and major[1:].isdigit():
        return (1, int(major[1:]))
    return (0, major)


class VersionClassifier:
    """Classifies version strings, memoizing per distinct string."""

    def classify(self, version: str) -> Classification:
        return classify(version)

    def sort_key(self, version: str) -> tuple:
        return version_sort_key(version)
