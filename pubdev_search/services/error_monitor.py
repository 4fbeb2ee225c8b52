"""Report unhandled handler errors to the log and, optionally, an admin chat."""

from __future__ import annotations

import json
import traceback
from typing import Any

from aiogram import Bot
from aiogram.dispatcher.event.bases import UNHANDLED
from aiogram.types import ErrorEvent, Update, User

from pubdev_search.bot.utils.telegram import bot_send_with_retry
from pubdev_search.config import BotSettings
from pubdev_search.logging import logger

# Telegram messages are limited to 4096 characters.
TELEGRAM_MESSAGE_LIMIT = 3900
TRACEBACK_CHAR_LIMIT = 1800
PAYLOAD_CHAR_LIMIT = 1200
ACTOR_FIELDS = ("inline_query", "chosen_inline_result", "message", "callback_query")


class ErrorMonitor:
    """Error observer handler; register ``handle_error`` on the dispatcher."""

    def __init__(self, settings: BotSettings) -> None:
        self._settings = settings

    async def handle_error(self, event: ErrorEvent, bot: Bot):
        update_type, _ = self._describe_update(event.update)
        logger.error(
            "bot_error_captured",
            exception_type=event.exception.__class__.__name__,
            exception=str(event.exception),
            update_id=getattr(event.update, "update_id", None),
            update_type=update_type,
        )

        admin_id = self._settings.admin_telegram_id
        if admin_id is None:
            return UNHANDLED

        message = self._build_message(event)
        try:
            await bot_send_with_retry(bot, chat_id=admin_id, text=message, parse_mode=None)
        except Exception:
            logger.exception(
                "error_monitor_notification_failed",
                update_id=getattr(event.update, "update_id", None),
            )
        return UNHANDLED

    def _build_message(self, event: ErrorEvent) -> str:
        update = event.update
        exception = event.exception
        update_type, payload_preview = self._describe_update(update)
        traceback_text = self._format_traceback(exception)

        lines = [
            "PUB SEARCH BOT ERROR",
            f"Environment: {self._settings.environment}",
            f"Exception: {exception.__class__.__name__}: {exception}",
            f"Update ID: {getattr(update, 'update_id', 'unknown')}",
            f"Update Type: {update_type}",
            f"User: {self._describe_user(update)}",
        ]
        if traceback_text:
            lines.extend(["", "Traceback:", traceback_text])
        if payload_preview:
            lines.extend(["", "Payload:", payload_preview])

        return self._truncate("\n".join(lines), TELEGRAM_MESSAGE_LIMIT)

    def _describe_update(self, update: Update | None) -> tuple[str, str]:
        if update is None:
            return "unknown", ""
        for field in ACTOR_FIELDS:
            value = getattr(update, field, None)
            if value is not None:
                payload = value.model_dump(exclude_unset=True, exclude_none=True)
                return field, self._pretty_json(payload)
        return "unknown", ""

    def _describe_user(self, update: Update | None) -> str:
        user: User | None = None
        for field in ACTOR_FIELDS:
            source = getattr(update, field, None)
            if source is not None:
                user = getattr(source, "from_user", None)
                break
        if user is None:
            return "unknown"
        segments = [str(user.id)]
        full_name = " ".join(part for part in (user.first_name, user.last_name) if part)
        if full_name:
            segments.append(full_name)
        if user.username:
            segments.append(f"@{user.username}")
        return " | ".join(segments)

    def _format_traceback(self, exception: Exception) -> str:
        trace = "".join(traceback.format_exception(exception.__class__, exception, exception.__traceback__))
        return self._truncate(trace, TRACEBACK_CHAR_LIMIT) if trace.strip() else ""

    def _pretty_json(self, payload: Any) -> str:
        try:
            serialized = json.dumps(payload, ensure_ascii=False, indent=2, default=str)
        except TypeError:
            serialized = str(payload)
        return self._truncate(serialized, PAYLOAD_CHAR_LIMIT)

    @staticmethod
    def _truncate(value: str, limit: int) -> str:
        value = value.strip()
        if len(value) <= limit:
            return value
        return f"{value[: limit - 15].rstrip()}\n...[truncated]"


__all__ = ["ErrorMonitor"]
