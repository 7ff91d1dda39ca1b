"""VeraCrypt command lines built from resolved paths."""

import shlex


class VeraCryptCommandBuilder:
    """Builds list, mount and dismount command lines for the encryption tool."""

    def __init__(self, binary: str = "veracrypt", mount_options: str = ""):
        self._binary = binary
        self._mount_options = mount_options.strip()

    def list_volumes(self) -> str:
        return f"{self._binary} --text --list"

    def mount(self, container_path: str, mount_path: str) -> str:
        # Not forced into text mode so the tool can ask for the password itself
        parts = [self._binary, "--mount"]
        if self._mount_options:
            parts.append(self._mount_options)
        parts.extend([shlex.quote(container_path), shlex.quote(mount_path)])
        return " ".join(parts)

    def dismount(self, mount_path: str) -> str:
        return f"{self._binary} --dismount {shlex.quote(mount_path)}"
