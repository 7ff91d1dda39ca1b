"""Path Resolver - turns configured volume paths into absolute paths."""

from pathlib import Path

from ...config import VolumeConfig
from ...core.exceptions import ConfigError
from ...models import ResolvedPaths


class PathResolver:
    """Resolves container and mount paths against the host storage root."""

    def resolve(self, base: str, relative_or_absolute: str) -> str:
        """Return absolute input unchanged, otherwise join it under ``base``."""
        if Path(relative_or_absolute).is_absolute():
            return relative_or_absolute
        return str(Path(base).absolute() / relative_or_absolute)

    def resolve_mount_path(self, base: str, config: VolumeConfig) -> str:
        if not config.is_mount_path_configured:
            raise ConfigError("No mount directory selected")
        return self.resolve(base, config.mount_path)

    def resolve_volume(self, base: str, config: VolumeConfig) -> ResolvedPaths:
        mount_path = self.resolve_mount_path(base, config)
        return ResolvedPaths(
            container_path=self.resolve(base, config.container_path),
            mount_path=mount_path,
        )
