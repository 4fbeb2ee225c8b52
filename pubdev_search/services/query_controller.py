"""Text-driven search controller with cancel-on-new-request semantics."""

from __future__ import annotations

import asyncio
import contextlib
from typing import Awaitable, Callable, Protocol, Sequence

from pubdev_search.domain.models import SearchResult, SearchState
from pubdev_search.logging import logger

FAILURE_TITLE = "Could not perform search"

ResultsObserver = Callable[[str, SearchState], Awaitable[None]]
FailureObserver = Callable[[str, str, str], Awaitable[None]]


class SearchBackend(Protocol):
    async def perform_search(self, query: str) -> Sequence[SearchResult]: ...


class QueryController:
    """Owns the search text lifecycle for one interactive session.

    At most one request is outstanding: ``search()`` cancels the previous
    task before starting a new one. Cancellation is cooperative, so every
    continuation also compares its generation with the current one before it
    touches ``state`` or notifies anyone. Only the latest search can win.

    The controller issues ``search("")`` on creation, so it has to be built
    inside a running event loop.
    """

    def __init__(
        self,
        client: SearchBackend,
        *,
        on_results: ResultsObserver | None = None,
        on_failure: FailureObserver | None = None,
        debounce_seconds: float = 0.0,
        autostart: bool = True,
    ) -> None:
        self._client = client
        self._on_results = on_results
        self._on_failure = on_failure
        self._debounce_seconds = debounce_seconds
        self._state = SearchState()
        self._task: asyncio.Task[None] | None = None
        self._generation = 0
        self._closed = False
        if autostart:
            self.search("")

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def pending(self) -> asyncio.Task[None] | None:
        if self._task is None or self._task.done():
            return None
        return self._task

    @property
    def closed(self) -> bool:
        return self._closed

    def search(self, text: str) -> asyncio.Task[None]:
        """Start a search for ``text``, superseding any outstanding one."""

        if self._closed:
            raise RuntimeError("QueryController is closed.")

        previous = self.pending
        if previous is not None:
            previous.cancel()
            logger.debug("search_superseded", generation=self._generation)

        self._generation += 1
        generation = self._generation
        self._state = SearchState(results=self._state.results, is_loading=True)
        self._task = asyncio.create_task(
            self._run(text, generation),
            name=f"pubdev-search-{generation}",
        )
        return self._task

    async def close(self) -> None:
        """Cancel the outstanding request; the controller is unusable afterwards."""

        if self._closed:
            return
        self._closed = True
        self._generation += 1
        task = self.pending
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def __aenter__(self) -> "QueryController":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _is_current(self, generation: int) -> bool:
        return not self._closed and generation == self._generation

    async def _run(self, text: str, generation: int) -> None:
        logger.debug("search_started", query=text, generation=generation)
        try:
            if self._debounce_seconds > 0:
                await asyncio.sleep(self._debounce_seconds)
            results = await self._client.perform_search(text)
        except asyncio.CancelledError:
            logger.debug("search_cancelled", query=text, generation=generation)
            raise
        except Exception as exc:
            if not self._is_current(generation):
                return
            self._state = SearchState(results=self._state.results, is_loading=False)
            logger.warning("search_failed", generation=generation, error=str(exc))
            await self._notify(self._on_failure, text, FAILURE_TITLE, str(exc))
            return

        if not self._is_current(generation):
            logger.debug("search_result_discarded", query=text, generation=generation)
            return
        self._state = SearchState(results=tuple(results), is_loading=False)
        logger.debug("search_applied", query=text, generation=generation)
        logger.info("search_completed", generation=generation, count=len(self._state.results))
        await self._notify(self._on_results, text, self._state)

    async def _notify(self, observer: Callable[..., Awaitable[None]] | None, *args) -> None:
        if observer is None:
            return
        try:
            await observer(*args)
        except Exception:
            logger.exception("search_observer_failed", observer=getattr(observer, "__name__", None))


__all__ = ["FAILURE_TITLE", "QueryController", "SearchBackend"]
