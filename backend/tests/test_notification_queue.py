"""
Tests for the notification queue.

Covers id assignment, automatic expiry, manual dismissal and the
independence of per-notification timers.
"""
import asyncio

import pytest

from rbac_admin.background.notifications import (
    DEFAULT_DURATION_MS,
    ExpiryTimer,
    NotificationQueue,
)
from rbac_admin.models.notification import NotificationKind


@pytest.mark.anyio
async def test_push_assigns_unique_increasing_ids() -> None:
    queue = NotificationQueue()

    pushed = [queue.push(f"message {index}") for index in range(50)]

    ids = [notification.id for notification in pushed]
    assert ids == sorted(ids)
    assert len(set(ids)) == 50
    assert [n.id for n in queue.list_all()] == ids
    await queue.aclose()


@pytest.mark.anyio
async def test_push_uses_default_duration_and_kind() -> None:
    queue = NotificationQueue()

    notification = queue.push("hello")

    assert notification.duration_ms == DEFAULT_DURATION_MS == 3000
    assert notification.kind is NotificationKind.INFO
    assert notification.created_at.tzinfo is not None
    await queue.aclose()


@pytest.mark.anyio
async def test_notification_expires_after_duration() -> None:
    queue = NotificationQueue()

    notification = queue.push("short lived", NotificationKind.SUCCESS, duration_ms=20)
    assert queue.get(notification.id) is not None

    await asyncio.sleep(0.1)

    assert queue.get(notification.id) is None
    assert len(queue) == 0


@pytest.mark.anyio
async def test_concurrent_pushes_expire_independently() -> None:
    queue = NotificationQueue()

    fast = queue.push("fast", duration_ms=20)
    slow = queue.push("slow", duration_ms=2000)

    await asyncio.sleep(0.1)

    assert queue.get(fast.id) is None
    assert queue.get(slow.id) == slow
    await queue.aclose()


@pytest.mark.anyio
async def test_dismiss_removes_immediately_and_is_idempotent() -> None:
    queue = NotificationQueue()
    notification = queue.push("close me")

    assert queue.dismiss(notification.id) is True
    assert queue.get(notification.id) is None
    assert queue.dismiss(notification.id) is False
    assert queue.dismiss(12345) is False
    await queue.aclose()


@pytest.mark.anyio
async def test_dismissing_one_keeps_other_timers_running() -> None:
    queue = NotificationQueue()
    first = queue.push("first", duration_ms=50)
    second = queue.push("second", duration_ms=50)

    queue.dismiss(first.id)
    assert queue.get(second.id) == second

    await asyncio.sleep(0.2)

    # the second notification still expired on its own timer
    assert queue.get(second.id) is None
    assert len(queue) == 0


@pytest.mark.anyio
async def test_dismiss_after_expiry_is_noop() -> None:
    queue = NotificationQueue()
    notification = queue.push("gone soon", duration_ms=10)

    await asyncio.sleep(0.05)

    assert queue.dismiss(notification.id) is False


@pytest.mark.anyio
async def test_push_rejects_non_positive_duration() -> None:
    queue = NotificationQueue()

    with pytest.raises(ValueError, match="duration_ms must be greater than 0"):
        queue.push("bad", duration_ms=0)
    assert len(queue) == 0


def test_queue_rejects_non_positive_default_duration() -> None:
    with pytest.raises(ValueError):
        NotificationQueue(default_duration_ms=-1)


def test_push_requires_running_event_loop() -> None:
    queue = NotificationQueue()

    with pytest.raises(RuntimeError):
        queue.push("no loop")
    assert len(queue) == 0


@pytest.mark.anyio
async def test_aclose_cancels_pending_timers() -> None:
    queue = NotificationQueue()
    queue.push("one", duration_ms=5000)
    queue.push("two", duration_ms=5000)

    await queue.aclose()

    assert queue.list_all() == []


@pytest.mark.anyio
async def test_expiry_timer_cancel_prevents_callback() -> None:
    fired: list[bool] = []

    timer = ExpiryTimer(0.02, lambda: fired.append(True))
    timer.cancel()
    await timer.wait()
    await asyncio.sleep(0.05)

    assert fired == []
    assert timer.done


@pytest.mark.anyio
async def test_expiry_timer_fires_once() -> None:
    fired: list[bool] = []

    timer = ExpiryTimer(0.01, lambda: fired.append(True))
    await timer.wait()

    assert fired == [True]
