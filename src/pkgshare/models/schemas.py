"""Pydantic models for version download data."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

MIN_THRESHOLD = 50
MAX_THRESHOLD = 100
DEFAULT_THRESHOLD = 90
UNKNOWN_MAJOR = "unknown"


class Tag(str, Enum):
    """Release channel of a version, derived from its prerelease identifier."""

    STABLE = "stable"
    ALPHA = "alpha"
    BETA = "beta"
    RC = "rc"
    CANARY = "canary"
    NEXT = "next"
    DEV = "dev"
    SNAPSHOT = "snapshot"
    PRERELEASE = "prerelease"
    INVALID = "invalid"


def coerce_downloads(value: object) -> int:
    """Turn a raw download count into a non-negative int (malformed -> 0)."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return 0
    if isinstance(value, (int, float)):
        if value != value or value in (float("inf"), float("-inf")):
            return 0
        return max(int(value), 0)
    return 0


def clamp_threshold(value: object) -> int:
    """Clamp a threshold percentage into [50, 100]."""
    try:
        number = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return DEFAULT_THRESHOLD
    return min(max(number, MIN_THRESHOLD), MAX_THRESHOLD)


# --- Source data ---


class VersionRecord(BaseModel):
    """Weekly downloads for a single published version."""

    model_config = ConfigDict(frozen=True)

    version: str
    downloads: int = 0
    published_date: datetime | None = None
    is_latest: bool = False

    @field_validator("downloads", mode="before")
    @classmethod
    def _coerce_downloads(cls, value: object) -> int:
        return coerce_downloads(value)


class PackageVersions(BaseModel):
    """Version listing of a package as published on the registry."""

    name: str
    versions: list[str] = Field(default_factory=list)  # registry publish order
    publish_dates: dict[str, datetime] = Field(default_factory=dict)
    created_date: datetime | None = None
    latest: str | None = None


class PackageSuggestion(BaseModel):
    """A search hit offered while the user types a package name."""

    name: str
    version: str | None = None
    description: str = ""


# --- Derived data ---


class ParsedVersion(BaseModel):
    """Semantic version components of a parsable version string."""

    model_config = ConfigDict(frozen=True)

    major: int
    minor: int
    patch: int
    prerelease: tuple[str | int, ...] = ()
    build: tuple[str, ...] = ()


class Classification(BaseModel):
    """Result of classifying a version string."""

    model_config = ConfigDict(frozen=True)

    parsed: ParsedVersion | None = None  # None when unparsable
    tag: Tag
    major: str

    @property
    def is_valid(self) -> bool:
        return self.parsed is not None


class FilterSelection(BaseModel):
    """Active tag, major-line and threshold selections."""

    model_config = ConfigDict(frozen=True)

    selected_tags: frozenset[Tag] = frozenset({Tag.STABLE})
    selected_majors: frozenset[str] = frozenset()
    threshold_percent: int = DEFAULT_THRESHOLD

    @field_validator("threshold_percent", mode="before")
    @classmethod
    def _clamp_threshold(cls, value: object) -> int:
        return clamp_threshold(value)


class RankedEntry(BaseModel):
    """A version record placed in download rank order."""

    model_config = ConfigDict(frozen=True)

    version: str
    downloads: int
    published_date: datetime | None = None
    is_latest: bool = False
    tag: Tag
    major: str
    rank: int = Field(ge=1)
    share_percent: float = Field(ge=0, le=100)
    cumulative_downloads: int = Field(ge=0)
    cumulative_share_percent: float = Field(ge=0, le=100)
    within_threshold: bool = False
    is_boundary: bool = False  # the entry that reaches the threshold


class GoldenVersion(BaseModel):
    """Lowest version of a major line still inside the threshold."""

    model_config = ConfigDict(frozen=True)

    major: str
    version: str
    rank: int
    downloads: int
    cumulative_share_percent: float


class ThresholdSummary(BaseModel):
    """Per-major golden versions for one threshold, newest major first."""

    model_config = ConfigDict(frozen=True)

    threshold_percent: int
    total_downloads: int
    lines: tuple[GoldenVersion, ...] = ()
