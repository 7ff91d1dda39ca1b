"""
Volume Mount Module - SRP Compliant Implementation

Manages the mount/unmount lifecycle of one encrypted volume through the
VeraCrypt command line.

Components:
- MountOrchestrator: State machine exposing mount, unmount and toggle
- StatusProber: Interprets the tool's volume listing
- CommandRunner: Runs one shell command to completion
- VeraCryptCommandBuilder: Builds quoted tool command lines
- PathResolver: Resolves configured paths against the storage root
- StatusPublisher: Holds last-known state and emits events to the host
"""

from .command_builder import VeraCryptCommandBuilder
from .command_runner import CommandRunner
from .mount_orchestrator import MountOrchestrator
from .path_resolver import PathResolver
from .status_prober import StatusProber
from .status_publisher import StatusPublisher

__all__ = [
    "MountOrchestrator",
    "StatusProber",
    "CommandRunner",
    "VeraCryptCommandBuilder",
    "PathResolver",
    "StatusPublisher",
]
