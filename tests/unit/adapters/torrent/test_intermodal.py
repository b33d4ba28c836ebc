"""
Tests unitaires du createur de torrents intermodal.

Le sous-processus imdl est simule en patchant asyncio.create_subprocess_exec.
"""

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from ghostseed.adapters.torrent.intermodal import IntermodalTorrentCreator
from ghostseed.core.errors import TorrentCreationError

_EXEC = "ghostseed.adapters.torrent.intermodal.asyncio.create_subprocess_exec"


def _process(returncode: int = 0, stderr: bytes = b"") -> MagicMock:
    process = MagicMock()
    process.returncode = returncode
    process.communicate = AsyncMock(return_value=(b"", stderr))
    process.wait = AsyncMock(return_value=returncode)
    return process


@pytest.fixture
def seed_dir(tmp_path: Path) -> Path:
    path = tmp_path / "seed" / "Heat.1995.1080p.BluRay.x264-GRP"
    path.mkdir(parents=True)
    return path


class TestBuildCommand:
    """Tests pour build_command."""

    def test_private_with_announce(self, seed_dir: Path) -> None:
        creator = IntermodalTorrentCreator(announce_url="https://t.example/announce/abc")
        output = seed_dir / "x.torrent"

        assert creator.build_command(seed_dir, output) == [
            "imdl",
            "torrent",
            "create",
            "--follow-symlinks",
            "--private",
            "-a",
            "https://t.example/announce/abc",
            "--output",
            str(output),
            str(seed_dir),
        ]

    def test_public_without_announce(self, seed_dir: Path) -> None:
        creator = IntermodalTorrentCreator(private=False, binary="/opt/imdl")
        cmd = creator.build_command(seed_dir, seed_dir / "x.torrent")
        assert cmd[0] == "/opt/imdl"
        assert "--private" not in cmd
        assert "-a" not in cmd


class TestOutputPath:
    """Tests pour output_path."""

    def test_defaults_to_seed_dir(self, seed_dir: Path) -> None:
        creator = IntermodalTorrentCreator()
        assert creator.output_path(seed_dir, "Heat") == seed_dir / "Heat.torrent"

    def test_output_dir(self, seed_dir: Path, tmp_path: Path) -> None:
        creator = IntermodalTorrentCreator(output_dir=tmp_path / "torrents")
        assert creator.output_path(seed_dir, "Heat") == tmp_path / "torrents" / "Heat.torrent"


class TestCreate:
    """Tests pour create."""

    @pytest.mark.asyncio
    async def test_success(self, seed_dir: Path, tmp_path: Path) -> None:
        creator = IntermodalTorrentCreator(output_dir=tmp_path / "torrents")

        with patch(_EXEC, new=AsyncMock(return_value=_process())) as mock_exec:
            output = await creator.create(seed_dir, "Heat")

        assert output == tmp_path / "torrents" / "Heat.torrent"
        assert output.parent.is_dir()
        args = mock_exec.await_args.args
        assert args[:3] == ("imdl", "torrent", "create")
        assert args[-1] == str(seed_dir)

    @pytest.mark.asyncio
    async def test_existing_torrent_reused(self, seed_dir: Path) -> None:
        existing = seed_dir / "Heat.torrent"
        existing.write_bytes(b"d4:infod4:name4:Heatee")
        creator = IntermodalTorrentCreator()

        with patch(_EXEC, new=AsyncMock()) as mock_exec:
            assert await creator.create(seed_dir, "Heat") == existing

        mock_exec.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_binary_missing(self, seed_dir: Path) -> None:
        creator = IntermodalTorrentCreator()

        with patch(_EXEC, new=AsyncMock(side_effect=FileNotFoundError("imdl"))):
            with pytest.raises(TorrentCreationError, match="introuvable"):
                await creator.create(seed_dir, "Heat")

    @pytest.mark.asyncio
    async def test_nonzero_exit(self, seed_dir: Path) -> None:
        creator = IntermodalTorrentCreator()
        process = _process(returncode=1, stderr=b"error: Invalid announce URL")

        with patch(_EXEC, new=AsyncMock(return_value=process)):
            with pytest.raises(TorrentCreationError, match="Invalid announce URL"):
                await creator.create(seed_dir, "Heat")

    @pytest.mark.asyncio
    async def test_timeout_kills_process(self, seed_dir: Path) -> None:
        creator = IntermodalTorrentCreator(timeout=0.01)
        process = _process()
        process.kill = MagicMock()

        async def never_ends():
            await asyncio.sleep(10)

        process.communicate = AsyncMock(side_effect=never_ends)

        with patch(_EXEC, new=AsyncMock(return_value=process)):
            with pytest.raises(TorrentCreationError, match="trop long"):
                await creator.create(seed_dir, "Heat")

        process.kill.assert_called_once()
