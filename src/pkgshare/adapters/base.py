"""Abstract base class for package registry adapters."""

from abc import ABC, abstractmethod

from pkgshare.models.schemas import PackageSuggestion, PackageVersions, VersionRecord


class BaseAdapter(ABC):
    """Base class for registry adapters.

    Each adapter normalizes a registry's version listing and per-version
    download counts into VersionRecords for ranking.
    """

    @property
    @abstractmethod
    def ecosystem(self) -> str:
        """Return the ecosystem this adapter handles."""
        ...

    @abstractmethod
    async def fetch_package_versions(self, name: str) -> PackageVersions:
        """Fetch the published versions of a package.

        Args:
            name: Package name.

        Returns:
            PackageVersions with versions in publish order.

        Raises:
            PackageNotFoundError: If the package doesn't exist.
        """
        ...

    @abstractmethod
    async def fetch_version_downloads(self, name: str, period: str) -> dict[str, int]:
        """Fetch download counts per version.

        Args:
            name: Package name.
            period: Download window, e.g. "last-week".

        Returns:
            Mapping of version string to downloads. Empty if the stats
            service could not be reached.
        """
        ...

    @abstractmethod
    async def search_packages(self, query: str, limit: int = 10) -> list[PackageSuggestion]:
        """Return package name suggestions for a partial query."""
        ...

    async def get_version_records(self, name: str, period: str) -> list[VersionRecord]:
        """Join the version listing with download counts.

        Records follow the registry publish order; versions that only
        show up in the download stats are appended in the order the
        stats service returned them.

        Args:
            name: Package name.
            period: Download window.

        Returns:
            One VersionRecord per distinct version string.

        Raises:
            PackageNotFoundError: If the package doesn't exist.
        """
        package = await self.fetch_package_versions(name)
        downloads = await self.fetch_version_downloads(name, period)

        ordered = list(dict.fromkeys(package.versions))
        seen = set(ordered)
        ordered.extend(v for v in downloads if v not in seen)

        return [
            VersionRecord(
                version=version,
                downloads=downloads.get(version, 0),
                published_date=package.publish_dates.get(version),
                is_latest=version == package.latest,
            )
            for version in ordered
        ]


class PackageNotFoundError(Exception):
    """Raised when a package cannot be found."""

    def __init__(self, ecosystem: str, name: str) -> None:
        self.ecosystem = ecosystem
        self.name = name
        super().__init__(f"Package '{name}' not found in {ecosystem}")
