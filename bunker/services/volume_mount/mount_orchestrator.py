"""Mount Orchestrator - the volume's state machine. SRP: mount/unmount orchestration ONLY."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from .command_builder import VeraCryptCommandBuilder
from .command_runner import CommandRunner, wait_uninterrupted
from .path_resolver import PathResolver
from .status_prober import StatusProber
from .status_publisher import StatusPublisher
from ...config import Settings
from ...core.exceptions import (
    BusyError,
    MountFailed,
    NotMountedError,
    SpawnError,
    UnmountFailed,
    VolumeError,
)
from ...models import MountState, OperationKind, ProbeResult, ResolvedPaths

T = TypeVar("T")


class MountOrchestrator:
    """
    Owns the single authoritative MountState of the configured volume.

    Only one of mount(), unmount() and toggle() may run at a time. A call that
    arrives while another is in flight fails with BusyError without touching
    the external tool. State is written only after a conclusive probe or a
    successful command, and every write goes through the StatusPublisher.

    Cancelling a caller does not stop its operation. The operation runs to
    completion under the lock, including its state transition, and only then
    is CancelledError re-raised to the caller.
    """

    def __init__(
        self,
        settings: Settings,
        runner: CommandRunner,
        prober: StatusProber,
        resolver: PathResolver,
        publisher: StatusPublisher,
        command_builder: VeraCryptCommandBuilder,
    ):
        self._settings = settings
        self._runner = runner
        self._prober = prober
        self._resolver = resolver
        self._publisher = publisher
        self._commands = command_builder
        self._state = MountState.UNMOUNTED
        self._lock = asyncio.Lock()
        self._active: Optional[OperationKind] = None

    @property
    def state(self) -> MountState:
        return self._state

    @property
    def is_mounted(self) -> bool:
        return self._state == MountState.MOUNTED

    @property
    def is_busy(self) -> bool:
        return self._lock.locked()

    async def initialize(self) -> MountState:
        """Probe once at startup and publish the resulting state."""
        config = self._settings.volume_config
        if not config.is_mount_path_configured:
            logging.warning("No mount directory configured - assuming volume is unmounted")
            self._state = MountState.UNMOUNTED
            await self._publisher.on_status_changed(self._state)
            return self._state

        mount_path = self._resolver.resolve_mount_path(self._settings.base_directory, config)
        async with self._lock:
            try:
                probe = await self._prober.probe(mount_path)
                if probe.warning:
                    await self._publisher.on_operation_failed(OperationKind.PROBE, probe.warning)
                mounted = probe.mounted
            except SpawnError as e:
                await self._publisher.on_operation_failed(OperationKind.PROBE, e)
                mounted = False

            self._state = MountState.MOUNTED if mounted else MountState.UNMOUNTED
            logging.info(f"Initial mount status for {mount_path}: {self._state.value}")
            await self._publisher.on_status_changed(self._state)
        return self._state

    async def mount(self) -> ResolvedPaths:
        """Mount the container at the mount directory. Returns the paths used."""
        return await self._run_exclusive(OperationKind.MOUNT, self._mount_locked)

    async def unmount(self) -> ResolvedPaths:
        """Dismount the volume after confirming it is mounted. Returns the paths used."""
        return await self._run_exclusive(OperationKind.UNMOUNT, self._unmount_locked)

    async def toggle(self) -> MountState:
        """Re-probe, then mount or unmount. Returns the resulting state."""
        return await self._run_exclusive(OperationKind.TOGGLE, self._toggle_locked)

    async def _run_exclusive(
        self,
        kind: OperationKind,
        operation: Callable[[ResolvedPaths], Awaitable[T]],
    ) -> T:
        failed_kind = kind
        try:
            if self._lock.locked():
                raise BusyError(kind.value, self._active.value if self._active else None)
            paths = self._resolver.resolve_volume(
                self._settings.base_directory, self._settings.volume_config
            )
            async with self._lock:
                self._active = kind
                operation_task = asyncio.ensure_future(operation(paths))
                try:
                    return await asyncio.shield(operation_task)
                except asyncio.CancelledError:
                    # A dispatched command cannot be aborted: keep the lock until it is done
                    logging.warning(
                        f"{kind.value.capitalize()} cancelled by caller - "
                        f"waiting for the running command to finish"
                    )
                    await wait_uninterrupted(operation_task)
                    await self._report_detached_failure(operation_task, kind)
                    raise
                except VolumeError:
                    # toggle narrows _active to the operation it dispatched to
                    failed_kind = self._active or kind
                    raise
                finally:
                    self._active = None
        except VolumeError as e:
            logging.error(
                f"{failed_kind.value.capitalize()} failed: {e}",
                extra={
                    "operation": failed_kind.value,
                    "error_type": type(e).__name__,
                },
            )
            await self._publisher.on_operation_failed(failed_kind, e)
            raise

    async def _report_detached_failure(
        self, operation_task: asyncio.Future, kind: OperationKind
    ) -> None:
        """Publish the failure of an operation whose caller has gone away."""
        if operation_task.cancelled():
            return
        error = operation_task.exception()
        if error is None:
            return
        failed_kind = self._active or kind
        if isinstance(error, VolumeError):
            logging.error(f"{failed_kind.value.capitalize()} failed after cancellation: {error}")
            await self._publisher.on_operation_failed(failed_kind, error)
        else:
            logging.error(
                f"Unexpected error in cancelled {failed_kind.value}: {error}",
                exc_info=error,
            )

    async def _toggle_locked(self, paths: ResolvedPaths) -> MountState:
        logging.info("Toggling mount state...")
        probe = await self._probe(paths.mount_path)
        if probe.mounted:
            self._active = OperationKind.UNMOUNT
            await self._unmount_locked(paths, probe)
        else:
            self._active = OperationKind.MOUNT
            await self._mount_locked(paths)
        return self._state

    async def _mount_locked(self, paths: ResolvedPaths) -> ResolvedPaths:
        command = self._commands.mount(paths.container_path, paths.mount_path)
        logging.info(f"Executing mount command: {command}")
        outcome = await self._runner.run(command)

        if not outcome.succeeded:
            raise MountFailed(
                outcome.error_text(f"Mount command exited with code {outcome.exit_code}"),
                exit_code=outcome.exit_code,
            )

        logging.info(f"Mounted {paths.container_path} at {paths.mount_path}")
        await self._set_state(MountState.MOUNTED)
        await self._publisher.on_operation_succeeded(OperationKind.MOUNT, paths)
        await self._publisher.on_reload_requested(OperationKind.MOUNT, paths)
        return paths

    async def _unmount_locked(
        self, paths: ResolvedPaths, probe: Optional[ProbeResult] = None
    ) -> ResolvedPaths:
        if probe is None:
            probe = await self._probe(paths.mount_path)
        if not probe.mounted:
            raise NotMountedError(paths.mount_path)

        command = self._commands.dismount(paths.mount_path)
        logging.info(f"Executing unmount command: {command}")
        outcome = await self._runner.run(command)

        if not outcome.succeeded:
            raise UnmountFailed(
                outcome.error_text(f"Dismount command exited with code {outcome.exit_code}"),
                exit_code=outcome.exit_code,
            )

        logging.info(f"Unmounted {paths.mount_path}")
        await self._set_state(MountState.UNMOUNTED)
        await self._publisher.on_operation_succeeded(OperationKind.UNMOUNT, paths)
        await self._publisher.on_reload_requested(OperationKind.UNMOUNT, paths)
        return paths

    async def _probe(self, mount_path: str) -> ProbeResult:
        probe = await self._prober.probe(mount_path)
        if probe.warning:
            # Inconclusive: report it, keep the cached state
            await self._publisher.on_operation_failed(OperationKind.PROBE, probe.warning)
        else:
            await self._set_state(MountState.MOUNTED if probe.mounted else MountState.UNMOUNTED)
        return probe

    async def _set_state(self, state: MountState) -> None:
        if state == self._state:
            return
        self._state = state
        await self._publisher.on_status_changed(state)
