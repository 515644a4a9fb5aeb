import asyncio
import itertools
import logging
from collections.abc import Callable
from contextlib import suppress
from datetime import datetime, timezone

from ..models.notification import Notification, NotificationKind

DEFAULT_DURATION_MS = 3000


class ExpiryTimer:
    """Cancellable one-shot timer running on the current event loop.

    The callback fires once after ``delay_seconds`` unless :meth:`cancel`
    is called first.
    """

    def __init__(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._task: asyncio.Task[None] = asyncio.get_running_loop().create_task(
            self._run(delay_seconds)
        )

    async def _run(self, delay_seconds: float) -> None:
        await asyncio.sleep(delay_seconds)
        self._callback()

    @property
    def done(self) -> bool:
        return self._task.done()

    def cancel(self) -> None:
        self._task.cancel()

    async def wait(self) -> None:
        with suppress(asyncio.CancelledError):
            await self._task


class NotificationQueue:
    """
    Transient user-facing messages that expire on their own.

    Every push gets its own expiry timer; dismissing one notification
    cancels only that timer. Ids come from a monotonic counter so two
    pushes in the same millisecond never collide.
    """

    def __init__(self, default_duration_ms: int = DEFAULT_DURATION_MS) -> None:
        if default_duration_ms <= 0:
            raise ValueError("default_duration_ms must be greater than 0")
        self.default_duration_ms = default_duration_ms
        self._pending: dict[int, Notification] = {}
        self._timers: dict[int, ExpiryTimer] = {}
        self._ids = itertools.count(1)
        self._logger = logging.getLogger("rbac_admin.notifications")

    def __len__(self) -> int:
        return len(self._pending)

    def list_all(self) -> list[Notification]:
        return list(self._pending.values())

    def get(self, notification_id: int) -> Notification | None:
        return self._pending.get(notification_id)

    def push(
        self,
        message: str,
        kind: NotificationKind = NotificationKind.INFO,
        duration_ms: int | None = None,
    ) -> Notification:
        """Queue a notification and schedule its removal.

        Must be called with a running event loop.

        Raises:
            ValueError: If ``duration_ms`` is not positive
            RuntimeError: If no event loop is running
        """
        duration = self.default_duration_ms if duration_ms is None else duration_ms
        if duration <= 0:
            raise ValueError("duration_ms must be greater than 0")

        notification = Notification(
            id=next(self._ids),
            message=message,
            kind=NotificationKind(kind),
            duration_ms=duration,
            created_at=datetime.now(timezone.utc),
        )
        self._timers[notification.id] = ExpiryTimer(
            duration / 1000, lambda: self._expire(notification.id)
        )
        self._pending[notification.id] = notification
        self._logger.debug(
            "[NOTIFY] pushed id=%s kind=%s duration_ms=%s",
            notification.id,
            notification.kind.value,
            duration,
        )
        return notification

    def dismiss(self, notification_id: int) -> bool:
        """Remove a notification now. Returns False if it was already gone."""
        timer = self._timers.pop(notification_id, None)
        if timer is not None:
            timer.cancel()
        removed = self._pending.pop(notification_id, None)
        if removed is None:
            return False
        self._logger.debug("[NOTIFY] dismissed id=%s", notification_id)
        return True

    def _expire(self, notification_id: int) -> None:
        self._timers.pop(notification_id, None)
        if self._pending.pop(notification_id, None) is not None:
            self._logger.debug("[NOTIFY] expired id=%s", notification_id)

    async def aclose(self) -> None:
        """Cancel every pending timer and drop all notifications."""
        timers = list(self._timers.values())
        self._timers.clear()
        self._pending.clear()
        for timer in timers:
            timer.cancel()
        for timer in timers:
            await timer.wait()
