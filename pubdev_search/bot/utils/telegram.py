"""Telegram sending helpers with retry support."""

from __future__ import annotations

from typing import Any, Sequence

from aiogram import Bot
from aiogram.exceptions import TelegramNetworkError, TelegramRetryAfter, TelegramServerError
from aiogram.types import InlineQuery, InlineQueryResult, Message

from pubdev_search.logging import logger
from pubdev_search.utils.retry import retry_async

TELEGRAM_SEND_MAX_ATTEMPTS = 3
TELEGRAM_SEND_BASE_DELAY = 0.3
# An inline answer is only useful while the user is still looking at it.
INLINE_ANSWER_MAX_ATTEMPTS = 2
TRANSIENT_TELEGRAM_ERRORS = (TelegramNetworkError, TelegramRetryAfter, TelegramServerError)


async def answer_with_retry(message: Message, text: str, **kwargs: Any) -> Any:
    """Send a reply with retry/backoff."""

    async def _send():
        return await message.answer(text, **kwargs)

    return await retry_async(
        _send,
        max_attempts=TELEGRAM_SEND_MAX_ATTEMPTS,
        base_delay=TELEGRAM_SEND_BASE_DELAY,
        logger=logger,
        operation_name="telegram_answer",
    )


async def answer_inline_with_retry(
    inline_query: InlineQuery,
    results: Sequence[InlineQueryResult],
    **kwargs: Any,
) -> Any:
    """Answer an inline query, retrying only transient transport failures."""

    async def _send():
        return await inline_query.answer(list(results), **kwargs)

    return await retry_async(
        _send,
        max_attempts=INLINE_ANSWER_MAX_ATTEMPTS,
        base_delay=TELEGRAM_SEND_BASE_DELAY,
        retry_on=TRANSIENT_TELEGRAM_ERRORS,
        logger=logger,
        operation_name="telegram_answer_inline_query",
    )


async def bot_send_with_retry(bot: Bot, *, chat_id: int, text: str, **kwargs: Any) -> Any:
    """Send a message via Bot with retry/backoff."""

    async def _send():
        return await bot.send_message(chat_id=chat_id, text=text, **kwargs)

    return await retry_async(
        _send,
        max_attempts=TELEGRAM_SEND_MAX_ATTEMPTS,
        base_delay=TELEGRAM_SEND_BASE_DELAY,
        logger=logger,
        operation_name="telegram_send_message",
    )


__all__ = ["answer_inline_with_retry", "answer_with_retry", "bot_send_with_retry"]
