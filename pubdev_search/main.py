"""Application entrypoint."""

from __future__ import annotations

import asyncio

import httpx
from aiogram import Bot, Dispatcher
from aiogram.client.session.aiohttp import AiohttpSession

from pubdev_search.bot.routers import setup_routers
from pubdev_search.bot.sessions import SearchSessionRegistry
from pubdev_search.config import get_settings
from pubdev_search.i18n import I18nService
from pubdev_search.logging import configure_logging, logger
from pubdev_search.services.error_monitor import ErrorMonitor
from pubdev_search.services.registry import RegistryClient

ALLOWED_UPDATES = ["inline_query", "message"]


async def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)

    session = (
        AiohttpSession(proxy=settings.telegram_proxy) if settings.telegram_proxy else None
    )
    bot = Bot(token=settings.telegram_token.get_secret_value(), session=session)
    dp = Dispatcher()
    dp.include_router(setup_routers())
    error_monitor = ErrorMonitor(settings=settings)
    dp.errors.register(error_monitor.handle_error)

    i18n = I18nService(default_locale=settings.default_language)
    async with httpx.AsyncClient(follow_redirects=True) as http_client:
        registry_client = RegistryClient(http_client, settings=settings.registry)
        sessions = SearchSessionRegistry(
            registry_client,
            settings=settings.palette,
            i18n=i18n,
        )
        logger.info(
            "bot_starting",
            environment=settings.environment,
            registry=registry_client.base_url,
            primary_action=settings.palette.primary_action,
        )
        try:
            await dp.start_polling(
                bot,
                allowed_updates=ALLOWED_UPDATES,
                sessions=sessions,
                i18n=i18n,
                settings=settings,
            )
        finally:
            await sessions.close()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
