import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from .config import Settings
from .dependencies import get_mount_orchestrator, get_settings, override_settings
from .logging_config import setup_logging
from .services.volume_mount import MountOrchestrator


@asynccontextmanager
async def lifespan(
    settings: Optional[Settings] = None, configure_logging: bool = True
) -> AsyncIterator[MountOrchestrator]:
    """
    Start the volume core for an embedding host.

    Subscribe to events on ``dependencies.get_event_bus()`` before entering to
    receive the initial MountStatusChangedEvent.
    """
    if settings is not None:
        override_settings(settings)
    settings = get_settings()
    if configure_logging:
        setup_logging(settings)

    logging.info("Bunker starting up...")
    logging.info(f"Base directory: {settings.base_directory}")
    logging.info(f"Container file: {settings.container_file}")
    logging.info(f"Mount directory: {settings.mount_directory or '(not configured)'}")

    orchestrator = get_mount_orchestrator()
    await orchestrator.initialize()

    try:
        yield orchestrator
    finally:
        logging.info(f"Bunker shutting down - volume is {orchestrator.state.value}")
