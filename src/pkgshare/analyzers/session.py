"""Request boundary: keeps only the latest query and suggestion lookup."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from pkgshare.adapters.base import BaseAdapter
from pkgshare.analyzers.filter_state import FilterState
from pkgshare.config import DEFAULT_PERIOD
from pkgshare.models.schemas import PackageSuggestion

logger = logging.getLogger(__name__)


class QuerySession:
    """Loads version records for a package into a FilterState.

    Starting a new load cancels the one still in flight. A load that
    completes after being superseded is discarded through the state's
    generation token, so only the latest query is ever projected.
    """

    def __init__(self, adapter: BaseAdapter, state: FilterState | None = None) -> None:
        self.adapter = adapter
        self.state = state or FilterState()
        self.package_name: str | None = None
        self._task: asyncio.Future | None = None

    async def load(self, name: str, period: str = DEFAULT_PERIOD) -> bool:
        """Fetch records for a package and commit them to the state.

        Args:
            name: Package name.
            period: Download window.

        Returns:
            True if the records were committed, False if a newer load
            superseded this one.

        Raises:
            PackageNotFoundError: If the package doesn't exist.
        """
        if self._task is not None and not self._task.done():
            self._task.cancel()

        generation = self.state.begin_load()
        task = asyncio.ensure_future(self.adapter.get_version_records(name, period))
        self._task = task

        try:
            records = await task
        except asyncio.CancelledError:
            if self._task is not task:
                logger.debug(f"Load of {name} superseded before completion")
                return False
            raise

        committed = self.state.set_records(records, generation)
        if committed:
            self.package_name = name
            logger.debug(f"Loaded {len(records)} versions of {name}")
        return committed


class SuggestionDebouncer:
    """Delays search lookups so only the latest query reaches the registry.

    Usage:
        debouncer = SuggestionDebouncer(adapter.search_packages, delay=0.3)
        suggestions = await debouncer.request("reac")
        # None if a newer request() replaced this one during the delay
    """

    def __init__(
        self,
        fetch: Callable[[str], Awaitable[list[PackageSuggestion]]],
        delay: float = 0.3,
    ) -> None:
        self.fetch = fetch
        self.delay = delay
        self._pending: asyncio.Future | None = None

    def cancel(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def request(self, query: str) -> list[PackageSuggestion] | None:
        """Look up suggestions after the debounce delay.

        Returns:
            Suggestions for the query, [] for a blank query, or None if
            this request was superseded.
        """
        self.cancel()
        if not query.strip():
            return []

        task = asyncio.ensure_future(self._delayed(query))
        self._pending = task
        try:
            return await task
        except asyncio.CancelledError:
            if self._pending is not task:
                return None
            raise

    async def _delayed(self, query: str) -> list[PackageSuggestion]:
        await asyncio.sleep(self.delay)
        return await self.fetch(query)
