import logging
from typing import Optional

from ...core.events.event_bus import DomainEventBus
from ...core.events.mount_events import (
    MountStatusChangedEvent,
    OperationFailedEvent,
    OperationSucceededEvent,
    WorkspaceReloadRequestedEvent,
)
from ...core.exceptions import ProbeError
from ...models import MountState, OperationKind, ResolvedPaths


class StatusPublisher:
    def __init__(self, event_bus: DomainEventBus):
        self._event_bus = event_bus
        self._state: Optional[MountState] = None

    @property
    def current_state(self) -> MountState:
        return self._state or MountState.UNMOUNTED

    @property
    def is_mounted(self) -> bool:
        return self._state == MountState.MOUNTED

    async def on_status_changed(self, state: MountState) -> None:
        previous = self._state
        self._state = state
        logging.info(
            f"Mount status: {previous.value if previous else None} -> {state.value}",
            extra={"operation": "mount_status_change", "mount_status": state.value},
        )
        await self._publish(MountStatusChangedEvent(state=state, previous_state=previous))

    async def on_operation_succeeded(
        self, kind: OperationKind, paths: ResolvedPaths
    ) -> None:
        await self._publish(OperationSucceededEvent(kind=kind, paths=paths))

    async def on_operation_failed(self, kind: OperationKind, error: Exception) -> None:
        await self._publish(
            OperationFailedEvent(
                kind=kind,
                error_type=type(error).__name__,
                message=str(error),
                is_warning=isinstance(error, ProbeError),
            )
        )

    async def on_reload_requested(
        self, kind: OperationKind, paths: ResolvedPaths
    ) -> None:
        await self._publish(WorkspaceReloadRequestedEvent(kind=kind, paths=paths))

    async def _publish(self, event) -> None:
        try:
            await self._event_bus.publish(event)
        except Exception as e:
            logging.error(f"Error publishing {type(event).__name__}: {e}")
