"""Inline query and help handlers."""

from __future__ import annotations

from aiogram import Bot, Router
from aiogram.filters import Command, CommandStart
from aiogram.types import InlineQuery, Message

from pubdev_search.bot.sessions import SearchSessionRegistry
from pubdev_search.bot.utils.telegram import answer_with_retry
from pubdev_search.i18n import I18nService
from pubdev_search.logging import logger

router = Router()


@router.inline_query()
async def handle_inline_query(inline_query: InlineQuery, sessions: SearchSessionRegistry) -> None:
    user = inline_query.from_user
    if user is None:
        return
    session = await sessions.get_or_create(user.id, locale=user.language_code)
    logger.debug("inline_query_received", user_id=user.id, query=inline_query.query)
    # The session answers the query once the search settles.
    session.handle(inline_query)


@router.message(CommandStart())
async def handle_start(message: Message, bot: Bot, i18n: I18nService) -> None:
    if message.from_user is None:
        return
    me = await bot.me()
    locale = message.from_user.language_code
    greeting = i18n.gettext(
        "start.greeting",
        locale=locale,
        name=message.from_user.full_name,
        bot=me.username or "",
    )
    help_text = i18n.gettext("help.text", locale=locale, bot=me.username or "")
    await answer_with_retry(message, f"{greeting}\n\n{help_text}", parse_mode=None)


@router.message(Command("help"))
async def handle_help(message: Message, bot: Bot, i18n: I18nService) -> None:
    me = await bot.me()
    locale = message.from_user.language_code if message.from_user else None
    await answer_with_retry(
        message,
        i18n.gettext("help.text", locale=locale, bot=me.username or ""),
        parse_mode=None,
    )


__all__ = ["handle_help", "handle_inline_query", "handle_start", "router"]
