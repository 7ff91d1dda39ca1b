"""Command Runner - executes one external command line through the host shell."""

import asyncio
import logging

from ...core.exceptions import SpawnError
from ...models import CommandOutcome

# POSIX shell exit codes for "found but not executable" and "command not found"
SHELL_CANNOT_EXECUTE = 126
SHELL_COMMAND_NOT_FOUND = 127


class CommandRunner:
    """Runs a shell command to completion. SRP: process execution ONLY."""

    def __init__(self, encoding: str = "utf-8"):
        self._encoding = encoding

    async def run(self, command_line: str) -> CommandOutcome:
        """
        Run ``command_line`` and wait for it to exit.

        A non-zero exit status from the tool is returned, not raised.
        SpawnError is raised when the shell cannot be started or reports that
        the tool itself could not be executed (exit 126/127).

        Cancelling the caller does not interrupt the command: the runner waits
        for the process to exit and then re-raises CancelledError.
        """
        logging.debug(f"Executing: {command_line}")

        try:
            process = await asyncio.create_subprocess_shell(
                command_line,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logging.error(f"Could not start command '{command_line}': {e}")
            raise SpawnError(command_line, str(e)) from e

        communicate = asyncio.ensure_future(process.communicate())
        try:
            stdout, stderr = await asyncio.shield(communicate)
        except asyncio.CancelledError:
            logging.warning(
                f"Cancelled while '{command_line}' is running - waiting for it to exit"
            )
            await wait_uninterrupted(communicate)
            raise

        outcome = CommandOutcome(
            exit_code=process.returncode,
            stdout=self._decode(stdout),
            stderr=self._decode(stderr),
        )
        logging.debug(
            f"Command finished with exit code {outcome.exit_code}: {command_line}",
            extra={"operation": "run_command", "exit_code": outcome.exit_code},
        )

        if outcome.exit_code in (SHELL_CANNOT_EXECUTE, SHELL_COMMAND_NOT_FOUND):
            reason = outcome.error_text(f"shell exit code {outcome.exit_code}").strip()
            logging.error(f"Could not invoke '{command_line}': {reason}")
            raise SpawnError(command_line, reason)

        return outcome

    def _decode(self, data: bytes) -> str:
        return data.decode(self._encoding, errors="replace") if data else ""


async def wait_uninterrupted(task: asyncio.Future) -> None:
    """Wait until ``task`` is done, ignoring further cancellation requests."""
    while not task.done():
        try:
            await asyncio.wait([task])
        except asyncio.CancelledError:
            continue
