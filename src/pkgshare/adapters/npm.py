"""NPM registry adapter."""

import logging
from datetime import datetime

import httpx

from pkgshare.adapters.base import BaseAdapter, PackageNotFoundError
from pkgshare.config import Settings
from pkgshare.models.schemas import PackageSuggestion, PackageVersions, coerce_downloads

logger = logging.getLogger(__name__)

# The per-version downloads endpoint only serves the last seven days.
SUPPORTED_PERIODS = ("last-week",)


def encode_name(name: str) -> str:
    """URL-encode scoped package names (@org/pkg -> @org%2Fpkg)."""
    return name.replace("/", "%2F")


def parse_timestamp(value: object) -> datetime | None:
    """Parse an npm ISO-8601 timestamp, None if missing or malformed."""
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


class NpmAdapter(BaseAdapter):
    """Adapter for the NPM registry.

    Data sources:
    - Versions, publish times, dist-tags: https://registry.npmjs.org/{package}
    - Per-version downloads: https://api.npmjs.org/versions/{package}/{period}
    - Search suggestions: https://registry.npmjs.org/-/v1/search
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            client: Optional httpx client for making requests.
            settings: Registry URLs and timeout. Defaults to Settings().
        """
        self._client = client
        self.settings = settings or Settings()

    @property
    def ecosystem(self) -> str:
        return "npm"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create an HTTP client."""
        if self._client is not None:
            return self._client
        return httpx.AsyncClient(timeout=self.settings.timeout)

    async def _fetch_json(self, url: str, params: dict | None = None) -> dict | list:
        """Fetch JSON from a URL."""
        client = await self._get_client()
        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
            return response.json()
        finally:
            if self._client is None:
                await client.aclose()

    async def fetch_package_versions(self, name: str) -> PackageVersions:
        """Fetch the version listing of an NPM package.

        Args:
            name: Package name (supports scoped packages like @org/pkg).

        Returns:
            PackageVersions in registry publish order.

        Raises:
            PackageNotFoundError: If the package doesn't exist.
        """
        url = f"{self.settings.registry_url}/{encode_name(name)}"

        try:
            data = await self._fetch_json(url)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise PackageNotFoundError(self.ecosystem, name) from e
            raise

        times = data.get("time") or {}
        versions = list((data.get("versions") or {}).keys())

        publish_dates = {}
        for version in versions:
            published = parse_timestamp(times.get(version))
            if published is not None:
                publish_dates[version] = published

        return PackageVersions(
            name=data.get("name", name),
            versions=versions,
            publish_dates=publish_dates,
            created_date=parse_timestamp(times.get("created")),
            latest=(data.get("dist-tags") or {}).get("latest"),
        )

    async def fetch_version_downloads(self, name: str, period: str = "last-week") -> dict[str, int]:
        """Fetch per-version download counts.

        Transport and HTTP failures degrade to an empty mapping.

        Args:
            name: Package name.
            period: Download window; only "last-week" is served by npm.

        Returns:
            Mapping of version string to downloads.

        Raises:
            ValueError: If the period is not supported.
        """
        if period not in SUPPORTED_PERIODS:
            supported = ", ".join(SUPPORTED_PERIODS)
            raise ValueError(f"Unsupported period: {period}. Supported: {supported}")

        url = f"{self.settings.downloads_url}/versions/{encode_name(name)}/{period}"
        try:
            data = await self._fetch_json(url)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Could not fetch downloads for {name}: {e}")
            return {}

        downloads = data.get("downloads") if isinstance(data, dict) else None
        if not isinstance(downloads, dict):
            logger.warning(f"Unexpected downloads payload for {name}")
            return {}
        return {str(version): coerce_downloads(count) for version, count in downloads.items()}

    async def search_packages(self, query: str, limit: int = 10) -> list[PackageSuggestion]:
        """Search the registry for package names matching a partial query.

        Args:
            query: Text typed so far.
            limit: Maximum number of suggestions.

        Returns:
            Suggestions in registry relevance order.
        """
        query = query.strip()
        if not query:
            return []

        url = f"{self.settings.registry_url}/-/v1/search"
        data = await self._fetch_json(url, params={"text": query, "size": limit})

        suggestions = []
        for obj in data.get("objects", []):
            package = obj.get("package") if isinstance(obj, dict) else None
            if not isinstance(package, dict) or not package.get("name"):
                continue
            suggestions.append(
                PackageSuggestion(
                    name=package["name"],
                    version=package.get("version"),
                    description=package.get("description") or "",
                )
            )
        return suggestions[:limit]
