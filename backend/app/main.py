"""Main application entry point."""

import logging
from contextlib import asynccontextmanager

# Configure logging FIRST, before any other imports
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)

# Reduce noise from third-party libraries (must be set before importing them)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("asyncio").setLevel(logging.WARNING)

from fastapi import FastAPI
from fastapi.responses import ORJSONResponse

# Try to use uvloop for better performance (Unix only)
try:
    import uvloop
    uvloop.install()
    _UVLOOP_ENABLED = True
except ImportError:
    _UVLOOP_ENABLED = False

from app.api import router
from app.clients import TelegramClient
from app.config import Settings, get_settings
from app.services import NotificationSink, Notifier, SignalProcessor
from core.correlation import ConditionStore

APP_NAME = "Confluence Signal"
APP_VERSION = "0.1.0"

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    sink: NotificationSink | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Settings to use instead of the cached environment settings
        sink: Notification sink to use instead of the Telegram client
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        cfg = settings or get_settings()
        logging.getLogger().setLevel(cfg.log_level.upper())

        logger.info(f"Starting {APP_NAME}...")
        logger.info(f"Event loop: {'uvloop' if _UVLOOP_ENABLED else 'asyncio'}")

        telegram: TelegramClient | None = None
        notification_sink = sink
        if notification_sink is None:
            if cfg.telegram_enabled:
                telegram = TelegramClient(
                    bot_token=cfg.telegram_bot_token,
                    chat_id=cfg.telegram_chat_id,
                    base_url=cfg.telegram_api_url,
                    timeout=cfg.telegram_timeout,
                )
                notification_sink = telegram
                logger.info("Telegram notifications enabled")
            else:
                logger.warning("Telegram bot token/chat id not set - notifications disabled")

        store = ConditionStore(cfg.correlator_config())
        notifier = Notifier(notification_sink)
        app.state.store = store
        app.state.notifier = notifier
        app.state.processor = SignalProcessor(store, notifier)

        logger.info(
            f"Correlation: max {store.config.max_emissions_per_session} signals/session, "
            f"FVG window {store.config.fvg_window}, policy {store.config.update_policy}"
        )

        yield

        # Shutdown
        logger.info("Shutting down...")
        await notifier.close(timeout=cfg.notify_shutdown_timeout)
        if telegram:
            await telegram.close()
        logger.info("Shutdown complete")

    application = FastAPI(
        title=APP_NAME,
        description="Correlates sweep, FVG, absorption and CVD events into trade signals",
        version=APP_VERSION,
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
    )

    application.include_router(router)

    @application.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": APP_NAME,
            "version": APP_VERSION,
            "status": "Server is running",
        }

    @application.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return application


app = create_app()


def main():
    """Run the application."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
