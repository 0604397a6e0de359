"""Unit tests for the notification history, per-call capture and static confirmer."""

import asyncio

import pytest

from portfolio.domain.entities import Severity
from portfolio.infrastructure.notifications.notification_log import NotificationLog, StaticConfirmer


def test_history_is_bounded_and_newest_last():
    log = NotificationLog(max_size=2)
    log.notify("Success", "one", Severity.SUCCESS)
    log.notify("Error", "two", Severity.ERROR)
    log.notify("Success", "three", Severity.SUCCESS)

    assert [n.description for n in log.history()] == ["two", "three"]


def test_capture_returns_only_notifications_raised_inside():
    log = NotificationLog()
    log.notify("Success", "before")

    with log.capture() as raised:
        log.notify("Error", "during", Severity.ERROR)
    log.notify("Success", "after")

    assert [n.description for n in raised] == ["during"]
    assert [n.description for n in log.history()] == ["before", "during", "after"]


def test_capture_ignores_other_notifiers():
    log, other = NotificationLog(), NotificationLog()
    with log.capture() as raised:
        other.notify("Success", "elsewhere")
        log.notify("Success", "here")
    assert [n.description for n in raised] == ["here"]


@pytest.mark.asyncio
async def test_concurrent_captures_do_not_mix():
    log = NotificationLog()
    first_raised = asyncio.Event()

    async def first():
        with log.capture() as raised:
            log.notify("Success", "first")
            first_raised.set()
            await asyncio.sleep(0.01)
        return raised

    async def second():
        await first_raised.wait()
        with log.capture() as raised:
            log.notify("Error", "second", Severity.ERROR)
            await asyncio.sleep(0)
        return raised

    a, b = await asyncio.gather(first(), second())

    assert [n.description for n in a] == ["first"]
    assert [n.description for n in b] == ["second"]


@pytest.mark.asyncio
async def test_capture_includes_spawned_tasks():
    log = NotificationLog()

    async def worker(name):
        log.notify("Success", name)

    with log.capture() as raised:
        await asyncio.gather(worker("a"), worker("b"))

    assert sorted(n.description for n in raised) == ["a", "b"]


def test_clear_empties_history():
    log = NotificationLog()
    log.notify("Success", "x")
    log.clear()
    assert log.history() == []


@pytest.mark.asyncio
async def test_static_confirmer():
    assert await StaticConfirmer(True).confirm("Delete?") is True
    assert await StaticConfirmer(False).confirm("Delete?") is False
