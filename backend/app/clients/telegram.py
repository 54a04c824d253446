"""Telegram Bot API client for trade alerts."""

import logging

import httpx

logger = logging.getLogger(__name__)


class TelegramClient:
    """Minimal Telegram Bot API client (sendMessage only)."""

    BASE_URL = "https://api.telegram.org"

    def __init__(
        self,
        bot_token: str,
        chat_id: str,
        base_url: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            bot_token: Bot token issued by BotFather
            chat_id: Chat that receives the alerts
            base_url: API root, overridable for testing
            timeout: Request timeout in seconds
            transport: Optional httpx transport (for testing)
        """
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.base_url = base_url or self.BASE_URL
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def send(self, message: str) -> bool:
        """Send a text message to the configured chat.

        Delivery failures are logged and never raised.

        Returns:
            True if Telegram accepted the message
        """
        client = await self._get_client()
        try:
            response = await client.post(
                f"/bot{self.bot_token}/sendMessage",
                json={"chat_id": self.chat_id, "text": message},
            )
        except httpx.HTTPError as e:
            logger.warning(f"Error sending Telegram alert: {e}")
            return False

        if response.is_success:
            logger.info("Telegram alert sent successfully")
            return True

        logger.warning(f"Failed to send Telegram alert: {response.status_code} {response.text}")
        return False
