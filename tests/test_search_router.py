"""Tests for inline query and help handlers."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest

from pubdev_search.bot.routers.search import handle_help, handle_inline_query, handle_start
from pubdev_search.bot.sessions import SearchSessionRegistry
from pubdev_search.config import PaletteSettings
from pubdev_search.i18n import I18nService


class DummyInlineQuery:
    def __init__(self, query: str, from_user) -> None:
        self.query = query
        self.from_user = from_user
        self.answers: list[tuple[list, dict]] = []

    async def answer(self, results, **kwargs):
        self.answers.append((results, kwargs))


class DummyMessage:
    def __init__(self, text: str, from_user) -> None:
        self.text = text
        self.from_user = from_user
        self.answers: list[tuple[str, str | None]] = []

    async def answer(self, text: str, parse_mode: str | None = None):
        self.answers.append((text, parse_mode))
        return text


class DummyBot:
    async def me(self):
        return SimpleNamespace(username="pubsearchbot")


def _user(user_id: int = 7, language_code: str = "en"):
    return SimpleNamespace(id=user_id, full_name="Test User", language_code=language_code)


@pytest.fixture
def i18n() -> I18nService:
    return I18nService(default_locale="en")


@pytest.mark.asyncio
async def test_inline_query_is_answered_through_user_session(fake_client, i18n):
    fake_client.responses["provider"] = ["provider"]
    sessions = SearchSessionRegistry(fake_client, settings=PaletteSettings(), i18n=i18n)
    query = DummyInlineQuery("provider", _user())

    await handle_inline_query(query, sessions)
    session = await sessions.get_or_create(7)
    if session.controller.pending is not None:
        await asyncio.wait({session.controller.pending})

    assert 7 in sessions
    assert fake_client.calls == ["provider"]
    assert [article.title for article in query.answers[0][0]] == ["provider"]
    await sessions.close()


@pytest.mark.asyncio
async def test_inline_query_without_user_is_ignored(fake_client, i18n):
    sessions = SearchSessionRegistry(fake_client, settings=PaletteSettings(), i18n=i18n)

    await handle_inline_query(DummyInlineQuery("x", None), sessions)

    assert len(sessions) == 0


@pytest.mark.asyncio
async def test_start_greets_with_usage(i18n):
    message = DummyMessage("/start help", _user())

    await handle_start(message, DummyBot(), i18n)

    text, parse_mode = message.answers[0]
    assert "Test User" in text
    assert "@pubsearchbot" in text
    assert parse_mode is None


@pytest.mark.asyncio
async def test_help_uses_user_locale(i18n):
    message = DummyMessage("/help", _user(language_code="zh"))

    await handle_help(message, DummyBot(), i18n)

    assert message.answers[0][0].startswith("用法")
