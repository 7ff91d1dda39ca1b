from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .core.exceptions import ProbeError


class MountState(str, Enum):
    """Mount state of the configured volume as last confirmed by the tool."""

    UNMOUNTED = "Unmounted"
    MOUNTED = "Mounted"


class OperationKind(str, Enum):
    """Operations reported to the host through events."""

    MOUNT = "mount"
    UNMOUNT = "unmount"
    TOGGLE = "toggle"
    PROBE = "probe"


class CommandOutcome(BaseModel):
    """Result of one external command invocation."""

    exit_code: int = Field(..., description="Process exit status")
    stdout: str = Field(default="", description="Captured standard output")
    stderr: str = Field(default="", description="Captured standard error")

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    def error_text(self, fallback: str) -> str:
        """Tool diagnostic verbatim, or ``fallback`` when stderr is empty."""
        return self.stderr if self.stderr.strip() else fallback


class ResolvedPaths(BaseModel):
    """Absolute paths used by a mount or unmount operation."""

    container_path: str = Field(..., description="Absolute container file path")
    mount_path: str = Field(..., description="Absolute mount directory path")


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a single list command, consumed immediately by the orchestrator."""

    mounted: bool
    raw: str
    warning: Optional[ProbeError] = None

    @property
    def is_conclusive(self) -> bool:
        return self.warning is None
