"""Debounced search with a results dropdown and navigation on selection."""

import asyncio
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set

from common.constants import SEARCH_DEBOUNCE_MS
from common.logging_config import get_logger
from cli.location import Location, route_for_type

logger = get_logger(__name__)

FetchFiles = Callable[[str], Awaitable[List[Dict[str, Any]]]]


class SearchState(str, Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    LOADING = "loading"
    SHOWING_RESULTS = "showing_results"
    SHOWING_EMPTY = "showing_empty"


class SearchController:
    """
    Drives the search box.

    Keystrokes restart a debounce timer; when it expires the current text
    is submitted. Only the most recently submitted query may update the
    results: a response whose query is no longer the latest one is
    dropped, whatever order the responses arrive in. In-flight requests
    are never cancelled, only ignored.
    """

    def __init__(
        self,
        fetch_files: FetchFiles,
        location: Location,
        debounce_seconds: float = SEARCH_DEBOUNCE_MS / 1000.0,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self.fetch_files = fetch_files
        self.location = location
        self.debounce_seconds = debounce_seconds
        self.on_change = on_change

        self.query = ""
        self.state = SearchState.IDLE
        self.results: List[Dict[str, Any]] = []

        self._latest_issued: Optional[str] = None
        self._debounce_task: Optional[asyncio.Task] = None
        self._in_flight: Set[asyncio.Task] = set()

    @property
    def is_open(self) -> bool:
        """Whether the dropdown (spinner, results or 'No results') is shown."""
        return self.state in (
            SearchState.LOADING,
            SearchState.SHOWING_RESULTS,
            SearchState.SHOWING_EMPTY,
        )

    @property
    def visible_results(self) -> List[Dict[str, Any]]:
        """Results shown in the dropdown; empty while a newer query is pending."""
        if self.state != SearchState.SHOWING_RESULTS:
            return []
        return self.results

    def _set_state(self, state: SearchState) -> None:
        self.state = state
        if self.on_change is not None:
            self.on_change()

    def on_input(self, text: str) -> None:
        """
        Record a keystroke and restart the debounce window.

        Must be called from inside a running event loop.
        """
        self.query = text
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()

        self._set_state(SearchState.DEBOUNCING)
        self._debounce_task = asyncio.get_running_loop().create_task(self._debounce(text))

    async def _debounce(self, text: str) -> None:
        await asyncio.sleep(self.debounce_seconds)

        # The request runs in its own task so a later keystroke, which
        # cancels this timer, cannot cancel it.
        task = asyncio.get_running_loop().create_task(self.submit(text))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def submit(self, query: str) -> None:
        """
        Run a search for query, as when the debounce window expires.

        An empty query closes the dropdown and clears the search parameter
        from the current location.
        """
        if not query:
            self._latest_issued = ""
            self.results = []
            self._set_state(SearchState.IDLE)
            self.location.clear_query()
            return

        self._latest_issued = query
        self._set_state(SearchState.LOADING)
        logger.debug(f"Searching for {query!r}")

        try:
            results = await self.fetch_files(query)
        except Exception as e:
            if query != self._latest_issued:
                logger.debug(f"Ignoring failure of superseded search {query!r}: {e}")
                return
            logger.error(f"Error loading search results for {query!r}: {e}")
            self.results = []
            self._set_state(SearchState.IDLE)
            return

        if query != self._latest_issued:
            logger.debug(f"Discarding stale results for {query!r} (latest is {self._latest_issued!r})")
            return

        self.results = list(results)
        self._set_state(SearchState.SHOWING_RESULTS if self.results else SearchState.SHOWING_EMPTY)

    def select(self, record: Dict[str, Any]) -> None:
        """
        Close the dropdown and go to the listing view of the record's type,
        carrying the current query text.
        """
        self.results = []
        self._set_state(SearchState.IDLE)
        self.location.navigate(route_for_type(record.get("type", "other")), self.query)

    async def wait_settled(self) -> None:
        """Wait for the pending debounce timer and every in-flight request."""
        if self._debounce_task is not None:
            try:
                await self._debounce_task
            except asyncio.CancelledError:
                pass
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)

    def close(self) -> None:
        """Stop the debounce timer; requests already sent finish on their own."""
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
        self._debounce_task = None
