# bunker/core/exceptions.py
from typing import Optional


class VolumeError(Exception):
    """Base class for every failure reported by the volume core."""


class ConfigError(VolumeError):
    """Raised when the volume is not configured well enough to run a command."""


class BusyError(VolumeError):
    """Raised when an operation is requested while another one is in flight."""

    def __init__(self, requested: str, active: Optional[str] = None):
        self.requested = requested
        self.active = active
        detail = f" ({active} in progress)" if active else ""
        super().__init__(
            f"Cannot {requested}: another volume operation is running{detail}. Try again later."
        )


class SpawnError(VolumeError):
    """Raised when the external tool could not be started at all."""

    def __init__(self, command_line: str, reason: str):
        self.command_line = command_line
        self.reason = reason
        super().__init__(f"Could not run '{command_line}': {reason}")


class ProbeError(VolumeError):
    """The list command failed for a reason other than "no volumes mounted"."""

    def __init__(self, message: str, exit_code: Optional[int] = None):
        self.exit_code = exit_code
        super().__init__(message)


class CommandFailedError(VolumeError):
    """The external tool refused an operation. The message is its own diagnostic."""

    def __init__(self, message: str, exit_code: int):
        self.exit_code = exit_code
        super().__init__(message)


class MountFailed(CommandFailedError):
    pass


class UnmountFailed(CommandFailedError):
    pass


class NotMountedError(VolumeError):
    """Raised instead of running a dismount for a volume that is not mounted."""

    def __init__(self, mount_path: str):
        self.mount_path = mount_path
        super().__init__(f"Volume is not currently mounted at {mount_path}")
