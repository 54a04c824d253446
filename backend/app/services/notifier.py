"""Fire-and-forget trade alert delivery.

Alerts are formatted and handed to a notification sink in a background
task, so sink latency or failure never delays the HTTP response and never
reaches the event originator. Failed deliveries are logged, not retried.
"""

import asyncio
import logging
from typing import Protocol, runtime_checkable

from core.correlation import format_alert_message
from core.models import TradeAlert

logger = logging.getLogger(__name__)


@runtime_checkable
class NotificationSink(Protocol):
    """Anything that can deliver a text message."""

    async def send(self, message: str) -> bool:
        """Deliver the message; return True on success."""
        ...


class Notifier:
    """Dispatch trade alerts to a sink without blocking the caller."""

    def __init__(self, sink: NotificationSink | None = None):
        """
        Args:
            sink: Delivery target; alerts are only logged when None
        """
        self.sink = sink
        self._tasks: set[asyncio.Task] = set()
        self.sent_count = 0
        self.failed_count = 0

    @property
    def enabled(self) -> bool:
        return self.sink is not None

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def dispatch(self, alert: TradeAlert) -> asyncio.Task | None:
        """Schedule delivery of an alert.

        Must be called from a running event loop and after the condition
        store lock has been released.

        Returns:
            The delivery task, or None when no sink is configured
        """
        message = format_alert_message(alert)

        if self.sink is None:
            logger.info(f"Notifications disabled, alert not sent:\n{message}")
            return None

        task = asyncio.create_task(self._deliver(message))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _deliver(self, message: str) -> None:
        try:
            ok = await self.sink.send(message)
        except Exception as e:
            logger.exception(f"Notification task failed: {e}")
            ok = False

        if ok:
            self.sent_count += 1
        else:
            self.failed_count += 1

    async def close(self, timeout: float = 5.0) -> None:
        """Wait for pending deliveries, cancelling any still running after timeout."""
        if not self._tasks:
            return

        tasks = list(self._tasks)
        done, pending = await asyncio.wait(tasks, timeout=timeout)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        if pending:
            logger.warning(f"Cancelled {len(pending)} pending notification(s) on shutdown")
