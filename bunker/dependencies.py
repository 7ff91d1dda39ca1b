from typing import Any, Dict

from bunker.core.events.event_bus import DomainEventBus

from .config import Settings
from .services.volume_mount import (
    CommandRunner,
    MountOrchestrator,
    PathResolver,
    StatusProber,
    StatusPublisher,
    VeraCryptCommandBuilder,
)

# Global singleton instances
_singletons: Dict[str, Any] = {}


def get_settings() -> Settings:
    """Hent Settings singleton instance."""
    if "settings" not in _singletons:
        _singletons["settings"] = Settings()
    return _singletons["settings"]


def override_settings(settings: Settings) -> None:
    """Replace the settings and drop every service built from the old ones."""
    _singletons.clear()
    _singletons["settings"] = settings


def get_event_bus() -> DomainEventBus:
    if "event_bus" not in _singletons:
        _singletons["event_bus"] = DomainEventBus()
    return _singletons["event_bus"]


def get_command_runner() -> CommandRunner:
    if "command_runner" not in _singletons:
        _singletons["command_runner"] = CommandRunner()
    return _singletons["command_runner"]


def get_command_builder() -> VeraCryptCommandBuilder:
    if "command_builder" not in _singletons:
        settings = get_settings()
        _singletons["command_builder"] = VeraCryptCommandBuilder(
            binary=settings.veracrypt_binary,
            mount_options=settings.mount_options,
        )
    return _singletons["command_builder"]


def get_status_prober() -> StatusProber:
    if "status_prober" not in _singletons:
        _singletons["status_prober"] = StatusProber(
            runner=get_command_runner(),
            command_builder=get_command_builder(),
            no_volumes_marker=get_settings().no_volumes_marker,
        )
    return _singletons["status_prober"]


def get_path_resolver() -> PathResolver:
    if "path_resolver" not in _singletons:
        _singletons["path_resolver"] = PathResolver()
    return _singletons["path_resolver"]


def get_status_publisher() -> StatusPublisher:
    if "status_publisher" not in _singletons:
        _singletons["status_publisher"] = StatusPublisher(event_bus=get_event_bus())
    return _singletons["status_publisher"]


def get_mount_orchestrator() -> MountOrchestrator:
    if "mount_orchestrator" not in _singletons:
        _singletons["mount_orchestrator"] = MountOrchestrator(
            settings=get_settings(),
            runner=get_command_runner(),
            prober=get_status_prober(),
            resolver=get_path_resolver(),
            publisher=get_status_publisher(),
            command_builder=get_command_builder(),
        )
    return _singletons["mount_orchestrator"]


def reset_singletons() -> None:
    """Reset all singletons (bruges i tests)."""
    _singletons.clear()
