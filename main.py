"""
Main entry point for the Telegram alarm bot.
Supports both polling and webhook modes.
"""

import asyncio
import logging
import sys

from aiogram import Bot, Dispatcher
from aiogram.utils.token import TokenValidationError
from aiogram.webhook.aiohttp_server import SimpleRequestHandler, setup_application
from aiohttp import web
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from bot import TelegramGateway, register_handlers
from config import Settings, load_settings
from scheduler import TimerRegistry, create_scheduler, shutdown_scheduler
from utils.exceptions import ConfigurationError
from utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_bot(settings: Settings) -> Bot:
    """
    Create the aiogram Bot.

    Raises:
        ConfigurationError: If the token is rejected by aiogram
    """
    try:
        return Bot(token=settings.bot_token)
    except TokenValidationError as e:
        raise ConfigurationError(f"Invalid bot token: {e}") from e


def create_dispatcher(registry: TimerRegistry, gateway: TelegramGateway) -> Dispatcher:
    """Create the dispatcher with the registry and gateway injected into handlers."""
    dp = Dispatcher(registry=registry, gateway=gateway)
    register_handlers(dp)
    return dp


async def on_startup(bot: Bot, dp: Dispatcher, settings: Settings) -> None:
    """Configure webhook on startup."""
    if settings.webhook_url:
        await bot.set_webhook(
            url=settings.webhook_url,
            allowed_updates=dp.resolve_used_update_types(),
        )
        logger.info(f"Webhook configured: {settings.webhook_url}")
    else:
        logger.info("Webhook URL not configured, using polling mode")


async def on_shutdown(
    bot: Bot, registry: TimerRegistry, scheduler: AsyncIOScheduler, settings: Settings
) -> None:
    """Cleanup on shutdown."""
    if settings.webhook_url:
        await bot.delete_webhook()
        logger.info("Webhook removed")

    chats = registry.active_chats()
    cancelled = registry.cancel_everything()
    logger.info(f"Cancelled {cancelled} pending timer(s) across {len(chats)} chat(s)")

    shutdown_scheduler(scheduler)


async def main(settings: Settings) -> None:
    """Main async function to run the bot."""
    bot = create_bot(settings)
    scheduler = create_scheduler(settings.timezone)
    registry = TimerRegistry(scheduler, max_timer_seconds=settings.max_timer_seconds)
    gateway = TelegramGateway(bot)
    dp = create_dispatcher(registry, gateway)
    logger.info("Handlers registered")

    try:
        logger.info("Starting Telegram alarm bot...")

        scheduler.start()
        logger.info("Scheduler started")

        if settings.webhook_url:
            # Webhook mode (production)
            app = web.Application()

            webhook_requests_handler = SimpleRequestHandler(
                dispatcher=dp,
                bot=bot,
            )
            webhook_requests_handler.register(app, path=settings.webhook_path)

            setup_application(app, dp, bot=bot)

            await on_startup(bot, dp, settings)

            logger.info(
                f"Bot webhook server starting on {settings.host}:{settings.port}"
            )
            await web._run_app(
                app,
                host=settings.host,
                port=settings.port,
            )
        else:
            # Polling mode (development)
            logger.info("Bot is running in polling mode. Press Ctrl+C to stop.")
            await dp.start_polling(
                bot,
                allowed_updates=dp.resolve_used_update_types(),
                handle_as_tasks=True,
            )

    except asyncio.CancelledError:
        logger.info("Bot cancelled")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        raise
    finally:
        logger.info("Shutting down...")
        await on_shutdown(bot, registry, scheduler, settings)

        try:
            await bot.session.close()
            logger.info("Bot session closed")
        except Exception as e:
            logger.error(f"Error closing bot session: {e}", exc_info=True)

        logger.info("Bot shutdown complete")


def run() -> None:
    """Console entry point."""
    setup_logging(log_level="INFO")

    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    setup_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
    )

    try:
        asyncio.run(main(settings))
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(0)


if __name__ == "__main__":
    run()
