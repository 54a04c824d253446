"""External API clients."""

from app.clients.telegram import TelegramClient

__all__ = ["TelegramClient"]
