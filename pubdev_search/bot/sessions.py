"""Per-user search sessions backing the inline palette."""

from __future__ import annotations

import asyncio
import time
from typing import Callable

from aiogram.types import InlineQuery

from pubdev_search.bot.utils.inline import failure_button, results_button, to_inline_results
from pubdev_search.bot.utils.telegram import answer_inline_with_retry
from pubdev_search.config import PaletteSettings
from pubdev_search.domain.models import SearchState
from pubdev_search.i18n import I18nService
from pubdev_search.logging import logger
from pubdev_search.services.query_controller import QueryController, SearchBackend
from pubdev_search.services.rendering import render_results

Clock = Callable[[], float]


class InlineSearchSession:
    """Binds one user's inline queries to a single ``QueryController``.

    Only the most recently received inline query is answered, and only with
    the outcome of a search for that exact text.
    """

    def __init__(
        self,
        user_id: int,
        client: SearchBackend,
        *,
        settings: PaletteSettings,
        i18n: I18nService,
        locale: str | None = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self.user_id = user_id
        self._settings = settings
        self._i18n = i18n
        self._locale = locale
        self._clock = clock
        self._inline_query: InlineQuery | None = None
        self.last_used = clock()
        self.controller = QueryController(
            client,
            on_results=self._show_results,
            on_failure=self._show_failure,
            debounce_seconds=settings.debounce_seconds,
        )

    def handle(self, inline_query: InlineQuery) -> asyncio.Task[None]:
        self._inline_query = inline_query
        if inline_query.from_user is not None and inline_query.from_user.language_code:
            self._locale = inline_query.from_user.language_code
        self.last_used = self._clock()
        return self.controller.search(inline_query.query)

    def idle_for(self) -> float:
        return self._clock() - self.last_used

    async def close(self) -> None:
        self._inline_query = None
        await self.controller.close()

    def _gettext(self, key: str, **kwargs) -> str:
        return self._i18n.gettext(key, locale=self._locale, **kwargs)

    def _take_bound_query(self, query: str) -> InlineQuery | None:
        inline_query = self._inline_query
        if inline_query is None or inline_query.query != query:
            return None
        # Telegram accepts a single answer per inline query.
        self._inline_query = None
        return inline_query

    async def _show_results(self, query: str, state: SearchState) -> None:
        inline_query = self._take_bound_query(query)
        if inline_query is None:
            return
        entries = render_results(
            state.results,
            self._settings.primary_action,
            package_manager=self._settings.package_manager,
            open_package_page=self._settings.open_package_page,
            copy_title=self._gettext("action.copy_install_command"),
            open_title=self._gettext("action.open_in_browser"),
        )
        await answer_inline_with_retry(
            inline_query,
            to_inline_results(entries),
            cache_time=self._settings.inline_cache_seconds,
            is_personal=True,
            button=results_button(self._results_caption(query, state)),
        )

    def _results_caption(self, query: str, state: SearchState) -> str:
        if not query:
            return self._gettext("search.placeholder")
        return self._gettext("results.summary", count=len(state.results))

    def _failure_caption(self, title: str) -> str:
        key = "search.failure_title"
        localized = self._gettext(key)
        return title if localized == key else localized

    async def _show_failure(self, query: str, title: str, message: str) -> None:
        inline_query = self._take_bound_query(query)
        if inline_query is None:
            return
        await answer_inline_with_retry(
            inline_query,
            [],
            cache_time=0,
            is_personal=True,
            button=failure_button(self._failure_caption(title), message),
        )


class SearchSessionRegistry:
    def __init__(
        self,
        client: SearchBackend,
        *,
        settings: PaletteSettings,
        i18n: I18nService,
        clock: Clock = time.monotonic,
    ) -> None:
        self._client = client
        self._settings = settings
        self._i18n = i18n
        self._clock = clock
        self._sessions: dict[int, InlineSearchSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._sessions

    async def get_or_create(self, user_id: int, *, locale: str | None = None) -> InlineSearchSession:
        await self.prune(exclude=user_id)
        session = self._sessions.get(user_id)
        if session is not None:
            return session
        session = InlineSearchSession(
            user_id,
            self._client,
            settings=self._settings,
            i18n=self._i18n,
            locale=locale,
            clock=self._clock,
        )
        self._sessions[user_id] = session
        logger.info("session_created", user_id=user_id, active_sessions=len(self._sessions))
        return session

    async def prune(self, *, exclude: int | None = None) -> int:
        """Close sessions idle for longer than ``session_idle_seconds``."""

        expired = [
            user_id
            for user_id, session in self._sessions.items()
            if user_id != exclude and session.idle_for() > self._settings.session_idle_seconds
        ]
        # Detach before awaiting so concurrent prunes never see the same session.
        sessions = [self._sessions.pop(user_id) for user_id in expired]
        for session in sessions:
            await session.close()
            logger.info("session_pruned", user_id=session.user_id)
        return len(sessions)

    async def close(self) -> None:
        sessions = list(self._sessions.values())
        self._sessions.clear()
        for session in sessions:
            await session.close()
        logger.info("sessions_closed", count=len(sessions))


__all__ = ["InlineSearchSession", "SearchSessionRegistry"]
