"""
Events emitted by the volume core to the host application.
"""

from dataclasses import dataclass
from typing import Optional

from bunker.core.events.domain_event import DomainEvent
from bunker.models import MountState, OperationKind, ResolvedPaths


@dataclass(frozen=True)
class MountStatusChangedEvent(DomainEvent):
    """Published at startup and on every confirmed mount state transition."""

    state: MountState
    previous_state: Optional[MountState] = None

    @property
    def is_mounted(self) -> bool:
        return self.state == MountState.MOUNTED


@dataclass(frozen=True)
class OperationSucceededEvent(DomainEvent):
    """Published when a mount or unmount command completed with exit code 0."""

    kind: OperationKind
    paths: ResolvedPaths


@dataclass(frozen=True)
class OperationFailedEvent(DomainEvent):
    """Published for every failed operation and for inconclusive probes."""

    kind: OperationKind
    error_type: str
    message: str
    is_warning: bool = False


@dataclass(frozen=True)
class WorkspaceReloadRequestedEvent(DomainEvent):
    """The filesystem under the host's storage root changed; the host may reload its view."""

    kind: OperationKind
    paths: ResolvedPaths
