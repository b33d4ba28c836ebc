"""
Creation des fichiers .torrent via la CLI intermodal (imdl).

Commande executee :
    imdl torrent create --follow-symlinks [--private] [-a URL] --output <out> <seed_dir>

Le .torrent est ecrit dans output_dir s'il est configure, sinon dans le
repertoire de seed lui-meme.
"""

import asyncio
from pathlib import Path
from typing import Optional

from loguru import logger

from ghostseed.core.errors import TorrentCreationError
from ghostseed.core.ports.publishing import ITorrentCreator


class IntermodalTorrentCreator(ITorrentCreator):
    """
    Createur de torrents base sur intermodal.

    Idempotent : si le .torrent existe deja, il est retourne sans relancer
    l'outil.
    """

    def __init__(
        self,
        announce_url: Optional[str] = None,
        private: bool = True,
        output_dir: Optional[Path] = None,
        binary: str = "imdl",
        timeout: float = 3600,
    ) -> None:
        self._announce_url = announce_url
        self._private = private
        self._output_dir = output_dir
        self._binary = binary
        self._timeout = timeout

    def output_path(self, seed_dir: Path, scene_name: str) -> Path:
        output_root = self._output_dir if self._output_dir is not None else seed_dir
        return output_root / f"{scene_name}.torrent"

    def build_command(self, seed_dir: Path, output: Path) -> list[str]:
        cmd = [self._binary, "torrent", "create", "--follow-symlinks"]
        if self._private:
            cmd.append("--private")
        if self._announce_url:
            cmd.extend(["-a", self._announce_url])
        cmd.extend(["--output", str(output), str(seed_dir)])
        return cmd

    async def create(self, seed_dir: Path, scene_name: str) -> Path:
        """
        Cree le .torrent du repertoire de seed.

        Args:
            seed_dir: Repertoire de seed (liens symboliques)
            scene_name: Nom de release (nom du .torrent)

        Returns:
            Chemin du .torrent

        Raises:
            TorrentCreationError: imdl absent, en echec ou trop long
        """
        output = self.output_path(seed_dir, scene_name)
        if output.exists():
            logger.info(f"Torrent deja present : {output}")
            return output

        output.parent.mkdir(parents=True, exist_ok=True)
        cmd = self.build_command(seed_dir, output)
        logger.info(f"Creation du torrent via intermodal : {output}")

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise TorrentCreationError(
                f"'{self._binary}' introuvable : intermodal est-il installe ?"
            ) from e

        try:
            _, stderr = await asyncio.wait_for(process.communicate(), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            raise TorrentCreationError(f"intermodal trop long pour {seed_dir}") from e

        if process.returncode != 0:
            message = stderr.decode(errors="replace").strip()
            raise TorrentCreationError(
                f"intermodal a echoue (code {process.returncode}) : {message}"
            )

        logger.info(f"Torrent cree : {output}")
        return output
