"""
Tests for StatusProber classification of the volume listing.
"""

import pytest

from bunker.core.exceptions import ProbeError, SpawnError
from bunker.services.volume_mount.command_builder import VeraCryptCommandBuilder
from bunker.services.volume_mount.status_prober import StatusProber

TARGET = "/home/u/vault/Vault/Secret"
LISTING = f"1: /home/u/vault/container.vc /dev/mapper/veracrypt1 {TARGET}\n"


class TestStatusProber:
    @pytest.fixture
    def prober(self, mock_runner):
        return StatusProber(mock_runner, VeraCryptCommandBuilder())

    @pytest.mark.asyncio
    async def test_runs_list_command(self, prober, mock_runner, outcome):
        mock_runner.run.return_value = outcome(0, stdout=LISTING)

        await prober.probe(TARGET)

        mock_runner.run.assert_awaited_once_with("veracrypt --text --list")

    @pytest.mark.asyncio
    async def test_no_volumes_marker_means_unmounted_without_warning(
        self, prober, mock_runner, outcome
    ):
        mock_runner.run.return_value = outcome(1, stderr="Error: No volumes mounted.")

        result = await prober.probe(TARGET)

        assert result.mounted is False
        assert result.warning is None
        assert result.is_conclusive

    @pytest.mark.asyncio
    @pytest.mark.parametrize("exit_code", [0, 1, 255])
    async def test_marker_wins_regardless_of_exit_code(
        self, prober, mock_runner, outcome, exit_code
    ):
        mock_runner.run.return_value = outcome(
            exit_code, stdout=LISTING, stderr="Error: No volumes mounted."
        )

        result = await prober.probe(TARGET)

        assert result.mounted is False
        assert result.warning is None

    @pytest.mark.asyncio
    async def test_other_failure_is_inconclusive(self, prober, mock_runner, outcome):
        mock_runner.run.return_value = outcome(1, stderr="Error: Permission denied")

        result = await prober.probe(TARGET)

        assert result.mounted is False
        assert isinstance(result.warning, ProbeError)
        assert str(result.warning) == "Error: Permission denied"
        assert result.warning.exit_code == 1

    @pytest.mark.asyncio
    async def test_failure_without_stderr_gets_generic_message(
        self, prober, mock_runner, outcome
    ):
        mock_runner.run.return_value = outcome(2)

        result = await prober.probe(TARGET)

        assert result.mounted is False
        assert "exit code 2" in str(result.warning)

    @pytest.mark.asyncio
    async def test_target_in_listing_means_mounted(self, prober, mock_runner, outcome):
        mock_runner.run.return_value = outcome(0, stdout=LISTING)

        result = await prober.probe(TARGET)

        assert result.mounted is True
        assert result.raw == LISTING

    @pytest.mark.asyncio
    async def test_other_volume_in_listing_means_unmounted(
        self, prober, mock_runner, outcome
    ):
        mock_runner.run.return_value = outcome(
            0, stdout="1: /data/other.vc /dev/mapper/veracrypt1 /media/veracrypt1\n"
        )

        result = await prober.probe(TARGET)

        assert result.mounted is False
        assert result.warning is None

    @pytest.mark.asyncio
    async def test_sibling_with_longer_name_counts_as_mounted(
        self, prober, mock_runner, outcome
    ):
        # Known limitation: plain substring match on the listing, see DESIGN.md
        mock_runner.run.return_value = outcome(
            0, stdout=f"1: /data/other.vc /dev/mapper/veracrypt1 {TARGET}2\n"
        )

        result = await prober.probe(TARGET)

        assert result.mounted is True

    @pytest.mark.asyncio
    async def test_custom_marker(self, mock_runner, outcome):
        prober = StatusProber(
            mock_runner, VeraCryptCommandBuilder(), no_volumes_marker="Keine Volumes"
        )
        mock_runner.run.return_value = outcome(1, stderr="Fehler: Keine Volumes eingehängt")

        result = await prober.probe(TARGET)

        assert result.mounted is False
        assert result.warning is None

    @pytest.mark.asyncio
    async def test_spawn_error_propagates(self, prober, mock_runner):
        mock_runner.run.side_effect = SpawnError("veracrypt --text --list", "boom")

        with pytest.raises(SpawnError):
            await prober.probe(TARGET)
