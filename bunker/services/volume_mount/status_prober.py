"""Status Prober - decides from the tool's volume listing whether a target is mounted."""

import logging

from .command_builder import VeraCryptCommandBuilder
from .command_runner import CommandRunner
from ...core.exceptions import ProbeError
from ...models import ProbeResult

DEFAULT_NO_VOLUMES_MARKER = "No volumes mounted"


class StatusProber:
    """Read-only mount status check. SRP: list command interpretation ONLY."""

    def __init__(
        self,
        runner: CommandRunner,
        command_builder: VeraCryptCommandBuilder,
        no_volumes_marker: str = DEFAULT_NO_VOLUMES_MARKER,
    ):
        self._runner = runner
        self._commands = command_builder
        self._no_volumes_marker = no_volumes_marker

    async def probe(self, target_mount_path: str) -> ProbeResult:
        """
        Run the list command and classify its output.

        Rules, first match wins:
        1. stderr contains the "no volumes mounted" marker: not mounted.
        2. non-zero exit otherwise: not mounted, with a ProbeError warning.
        3. exit 0: mounted if stdout contains the full target path.

        SpawnError from the runner is not caught.
        """
        outcome = await self._runner.run(self._commands.list_volumes())

        if self._no_volumes_marker in outcome.stderr:
            logging.info("No volumes are currently mounted")
            return ProbeResult(mounted=False, raw=outcome.stderr)

        if not outcome.succeeded:
            message = outcome.error_text(
                f"Volume list command failed with exit code {outcome.exit_code}"
            )
            logging.warning(
                f"Error checking mount status: {message}",
                extra={
                    "operation": "probe",
                    "exit_code": outcome.exit_code,
                    "target_path": target_mount_path,
                },
            )
            return ProbeResult(
                mounted=False,
                raw=outcome.stderr,
                warning=ProbeError(message, exit_code=outcome.exit_code),
            )

        mounted = target_mount_path in outcome.stdout
        logging.debug(f"Mount status for {target_mount_path}: {mounted}")
        return ProbeResult(mounted=mounted, raw=outcome.stdout)
