"""Conversion of palette list entries into Telegram inline query results."""

from __future__ import annotations

from typing import Sequence

from aiogram.types import (
    CopyTextButton,
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    InlineQueryResultArticle,
    InlineQueryResultsButton,
    InputTextMessageContent,
)

from pubdev_search.services.rendering import Action, CopyToClipboardAction, ListEntry

# Telegram accepts at most 50 results per inline answer.
INLINE_RESULTS_LIMIT = 50
COPY_TEXT_LIMIT = 256
BUTTON_TEXT_LIMIT = 64
HELP_START_PARAMETER = "help"
FAILURE_START_PARAMETER = "search_failed"


def action_payload(action: Action) -> str:
    if isinstance(action, CopyToClipboardAction):
        return action.content
    return action.url


def action_button(action: Action) -> InlineKeyboardButton:
    if isinstance(action, CopyToClipboardAction):
        return InlineKeyboardButton(
            text=action.title,
            copy_text=CopyTextButton(text=action.content[:COPY_TEXT_LIMIT]),
        )
    return InlineKeyboardButton(text=action.title, url=action.url)


def to_inline_results(
    entries: Sequence[ListEntry],
    *,
    limit: int = INLINE_RESULTS_LIMIT,
) -> list[InlineQueryResultArticle]:
    """One article per entry; the keyboard lists the actions in entry order.

    Picking the article posts the primary action's payload into the chat.
    """

    articles: list[InlineQueryResultArticle] = []
    for entry in entries[:limit]:
        payload = action_payload(entry.primary_action)
        articles.append(
            InlineQueryResultArticle(
                id=entry.key,
                title=entry.title,
                description=payload,
                input_message_content=InputTextMessageContent(message_text=payload),
                reply_markup=InlineKeyboardMarkup(
                    inline_keyboard=[[action_button(action)] for action in entry.actions]
                ),
            )
        )
    return articles


def results_button(text: str, *, start_parameter: str = HELP_START_PARAMETER) -> InlineQueryResultsButton:
    return InlineQueryResultsButton(
        text=_truncate(text, BUTTON_TEXT_LIMIT),
        start_parameter=start_parameter,
    )


def failure_button(title: str, message: str) -> InlineQueryResultsButton:
    text = f"{title}: {message}" if message else title
    return results_button(text, start_parameter=FAILURE_START_PARAMETER)


def _truncate(value: str, limit: int) -> str:
    value = " ".join(value.split())
    if len(value) <= limit:
        return value
    return f"{value[: limit - 1].rstrip()}…"


__all__ = [
    "FAILURE_START_PARAMETER",
    "HELP_START_PARAMETER",
    "INLINE_RESULTS_LIMIT",
    "action_button",
    "action_payload",
    "failure_button",
    "results_button",
    "to_inline_results",
]
