"""
Tests for the DomainEventBus.
"""

import asyncio
from unittest.mock import Mock, patch

import pytest

from bunker.core.events.domain_event import DomainEvent
from bunker.core.events.event_bus import DomainEventBus
from bunker.core.events.mount_events import (
    MountStatusChangedEvent,
    OperationFailedEvent,
)
from bunker.models import MountState, OperationKind


@pytest.mark.asyncio
async def test_subscribe_and_publish():
    """A handler is called when its subscribed event is published."""
    bus = DomainEventBus()
    handler_mock = Mock()

    async def async_handler(event: DomainEvent):
        handler_mock(event)

    await bus.subscribe(MountStatusChangedEvent, async_handler)

    event = MountStatusChangedEvent(state=MountState.MOUNTED)
    await bus.publish(event)

    handler_mock.assert_called_once_with(event)
    assert event.is_mounted


@pytest.mark.asyncio
async def test_publish_to_correct_handlers_only():
    """Only handlers for the published event type are called."""
    bus = DomainEventBus()
    status_mock = Mock()
    failure_mock = Mock()

    async def status_handler(event):
        status_mock(event)

    async def failure_handler(event):
        failure_mock(event)

    await bus.subscribe(MountStatusChangedEvent, status_handler)
    await bus.subscribe(OperationFailedEvent, failure_handler)

    event = OperationFailedEvent(
        kind=OperationKind.MOUNT, error_type="MountFailed", message="Incorrect password"
    )
    await bus.publish(event)

    failure_mock.assert_called_once_with(event)
    status_mock.assert_not_called()


@pytest.mark.asyncio
async def test_unsubscribe_stops_delivery():
    bus = DomainEventBus()
    handler_mock = Mock()

    async def handler(event):
        handler_mock(event)

    await bus.subscribe(MountStatusChangedEvent, handler)
    assert bus.handler_count(MountStatusChangedEvent) == 1

    assert await bus.unsubscribe(MountStatusChangedEvent, handler) is True
    assert await bus.unsubscribe(MountStatusChangedEvent, handler) is False

    await bus.publish(MountStatusChangedEvent(state=MountState.UNMOUNTED))
    handler_mock.assert_not_called()


@pytest.mark.asyncio
async def test_publish_with_no_subscribers():
    """Publishing without subscribers does not raise."""
    bus = DomainEventBus()

    try:
        await bus.publish(MountStatusChangedEvent(state=MountState.UNMOUNTED))
    except Exception as e:
        pytest.fail(f"Publishing with no subscribers raised an exception: {e}")


@pytest.mark.asyncio
async def test_failing_handler_does_not_stop_others():
    """If one handler fails, the other handlers still run."""
    bus = DomainEventBus()
    success_mock = Mock()
    fail_mock = Mock()

    async def success_handler(event):
        success_mock(event)
        await asyncio.sleep(0.01)

    async def failing_handler(event):
        fail_mock(event)
        raise ValueError("Handler failed intentionally")

    await bus.subscribe(MountStatusChangedEvent, failing_handler)
    await bus.subscribe(MountStatusChangedEvent, success_handler)

    event = MountStatusChangedEvent(state=MountState.MOUNTED)

    with patch("logging.error") as mock_log_error:
        await bus.publish(event)

        fail_mock.assert_called_once_with(event)
        success_mock.assert_called_once_with(event)

        mock_log_error.assert_called_once()
        log_args, _ = mock_log_error.call_args
        assert "Unhandled exception in handler 'failing_handler'" in log_args[0]
        assert "Handler failed intentionally" in log_args[0]
