"""Main entry point: run hydration reminders through the Telegram bot"""
import logging
import asyncio

from telegram.ext import Application

from hydration_tracker import config
from hydration_tracker.config import validate_config, LOG_LEVEL
from hydration_tracker.models.profile import Gender
from hydration_tracker.models.reminder import ReminderStrategy
from hydration_tracker.notifications.base import InMemoryNotifier, PermissionStatus
from hydration_tracker.notifications.telegram_notifier import TelegramNotifier
from hydration_tracker.services.container import ServiceContainer
from hydration_tracker.storage.base import create_store
from hydration_tracker.utils.datetime_helpers import make_local_date_fn

# Configure logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO)
)

logger = logging.getLogger(__name__)


def build_container(notifier) -> ServiceContainer:
    """Wire configured storage, clock and rules around a notifier"""
    return ServiceContainer(
        store=create_store(config.STORAGE_BACKEND),
        notifier=notifier,
        date_fn=make_local_date_fn(config.USER_TIMEZONE),
        reminder_strategy=ReminderStrategy(config.REMINDER_STRATEGY),
        unspecified_rate=Gender(config.UNSPECIFIED_GENDER_RATE),
    )


async def main() -> None:
    """Main application entry point"""
    app = None
    container = None
    try:
        # Validate configuration
        logger.info("Validating configuration...")
        validate_config()

        if config.TELEGRAM_BOT_TOKEN:
            logger.info("Starting Telegram bot...")
            app = Application.builder().token(config.TELEGRAM_BOT_TOKEN).build()
            notifier = TelegramNotifier(app, config.TELEGRAM_CHAT_ID, config.USER_TIMEZONE)
        else:
            logger.warning("TELEGRAM_BOT_TOKEN not set - reminders are only logged")
            notifier = InMemoryNotifier(permission=PermissionStatus.DENIED, grant_on_request=False)

        container = build_container(notifier)

        if app:
            await app.initialize()
            await app.start()

        # Load state and install reminders (after the job queue is running)
        logger.info("Loading profile and intake history...")
        await container.start()

        logger.info("Running. Press Ctrl+C to stop.")
        await asyncio.Event().wait()

    except (KeyboardInterrupt, asyncio.CancelledError):
        logger.info("Shutting down...")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        raise
    finally:
        # Cleanup
        if app:
            logger.info("Stopping bot...")
            await app.stop()
            await app.shutdown()

        if container:
            logger.info("Closing storage...")
            await container.close()

        logger.info("Shutdown complete")


def run() -> None:
    """Console script entry point"""
    asyncio.run(main())


if __name__ == "__main__":
    run()
