import asyncio
import logging
import sys

# Configure logging first
logging.basicConfig(level=logging.INFO, stream=sys.stdout)

from aiogram import Bot, Dispatcher
from aiogram.enums import ParseMode
from aiogram.client.bot import DefaultBotProperties
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.webhook.aiohttp_server import SimpleRequestHandler, setup_application
from aiohttp import web

from .config import settings
from .handlers import start, wizard
from .services.wizard_service import WizardService
from .wizard.catalog import Catalog, default_catalog, load_catalog


def init_catalog() -> Catalog:
    """ Loads the step catalog once for the lifetime of the process. """
    if settings.CATALOG_PATH:
        return load_catalog(settings.CATALOG_PATH)
    catalog = default_catalog()
    logging.info(f"Using built-in step catalog with {len(catalog)} steps.")
    return catalog


async def on_startup_webhook(bot: Bot):
    await bot.set_webhook(settings.webhook_url)
    logging.info(f"Telegram Webhook set to {settings.webhook_url}")


async def on_shutdown_webhook(bot: Bot):
    logging.info("Shutting down and deleting Telegram webhook...")
    await bot.delete_webhook()
    logging.info("Telegram Webhook deleted.")


async def start_polling(dp: Dispatcher, bot: Bot):
    logging.info("Starting bot in polling mode...")
    await bot.delete_webhook(drop_pending_updates=True)
    await dp.start_polling(bot)


def create_dispatcher(wizard_service: WizardService) -> Dispatcher:
    # Sessions live in memory only and are lost on restart.
    dp = Dispatcher(storage=MemoryStorage(), wizard_service=wizard_service)
    dp.include_router(start.router)
    dp.include_router(wizard.router)
    return dp


def main() -> None:
    logging.getLogger().setLevel(settings.LOG_LEVEL.upper())

    wizard_service = WizardService(init_catalog(), export_filename=settings.EXPORT_FILENAME)
    bot = Bot(token=settings.BOT_TOKEN.get_secret_value(), default=DefaultBotProperties(parse_mode=ParseMode.HTML))
    dp = create_dispatcher(wizard_service)

    if settings.WEBHOOK_HOST:
        logging.info("Starting bot in webhook mode...")
        dp.startup.register(on_startup_webhook)
        dp.shutdown.register(on_shutdown_webhook)

        app = web.Application()
        webhook_requests_handler = SimpleRequestHandler(dispatcher=dp, bot=bot)
        webhook_requests_handler.register(app, path=settings.WEBHOOK_PATH)
        setup_application(app, dp, bot=bot)

        web.run_app(app, host=settings.WEB_SERVER_HOST, port=settings.WEB_SERVER_PORT)
    else:
        asyncio.run(start_polling(dp, bot))


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        logging.info("Bot stopped.")
