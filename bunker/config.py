from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VolumeConfig(BaseModel):
    """Container file and mount target as configured by the operator."""

    container_path: str = Field(
        ..., description="Container file, absolute or relative to the base directory"
    )
    mount_path: str = Field(
        default="", description="Mount target relative to the base directory"
    )

    @property
    def is_mount_path_configured(self) -> bool:
        return bool(self.mount_path.strip())


class Settings(BaseSettings):
    # Storage root of the host (the vault folder)
    base_directory: str = "."

    # Volume
    container_file: str = "container.vc"
    mount_directory: str = ""  # Must be selected by the operator

    # External tool
    veracrypt_binary: str = "veracrypt"
    mount_options: str = ""  # Extra options placed after --mount
    no_volumes_marker: str = "No volumes mounted"

    # Logging konfiguration
    log_level: str = "INFO"
    log_file_path: str = "logs/bunker.log"
    log_retention_days: int = 30

    model_config = SettingsConfigDict(
        env_prefix="BUNKER_", env_file="settings.env", extra="ignore"
    )

    @property
    def volume_config(self) -> VolumeConfig:
        return VolumeConfig(
            container_path=self.container_file, mount_path=self.mount_directory
        )

    @property
    def log_directory(self) -> Path:
        """Returnerer log directory som Path objekt"""
        return Path(self.log_file_path).parent
