"""
Tests de l'uploader Torrust.

Utilise respx pour simuler l'API REST du tracker.
"""

from pathlib import Path

import httpx
import pytest
import respx

from ghostseed.adapters.upload.torrust import TorrustUploader, is_duplicate_response
from ghostseed.config import TorrustSettings
from ghostseed.core.errors import UploadError
from ghostseed.core.ports.publishing import UploadRequest

API_BASE = "https://tracker.example/api/v1"
UPLOAD_URL = f"{API_BASE}/torrent/upload"


@pytest.fixture
def settings() -> TorrustSettings:
    return TorrustSettings(
        enable=True,
        api_base=f"{API_BASE}/",
        api_key="tracker-key",
        series_category="tv shows",
        anime_category="anime",
        tags=[3, 5],
    )


@pytest.fixture
def torrent_file(tmp_path: Path) -> Path:
    path = tmp_path / "Heat.1995.1080p.BluRay.x264-GRP.torrent"
    path.write_bytes(b"d8:announce0:e")
    return path


def _request(torrent_path: Path, category: str = "movies") -> UploadRequest:
    return UploadRequest(
        title="Heat.1995.1080p.BluRay.x264-GRP",
        description_markdown="# Heat (1995)",
        torrent_path=torrent_path,
        category=category,
    )


class TestIsDuplicateResponse:
    """Tests pour is_duplicate_response."""

    def test_conflict_with_infohash_message(self) -> None:
        body = '{"error": "This torrent infohash already exists in our database"}'
        assert is_duplicate_response(409, body) is True

    def test_other_conflict(self) -> None:
        assert is_duplicate_response(409, '{"error": "title already exists"}') is False

    def test_other_status(self) -> None:
        assert is_duplicate_response(400, "infohash already exists") is False


class TestTorrustUploader:
    """Tests pour TorrustUploader."""

    def test_upload_url_strips_trailing_slash(self, settings: TorrustSettings) -> None:
        assert TorrustUploader(settings).upload_url == UPLOAD_URL

    def test_category_mapping(self, settings: TorrustSettings) -> None:
        uploader = TorrustUploader(settings)
        assert uploader.category_for("movies") == "movies"
        assert uploader.category_for("series") == "tv shows"
        assert uploader.category_for("anime") == "anime"
        assert uploader.category_for("autre") == "movies"

    @pytest.mark.asyncio
    @respx.mock
    async def test_upload_multipart(
        self, settings: TorrustSettings, torrent_file: Path
    ) -> None:
        route = respx.post(UPLOAD_URL).mock(
            return_value=httpx.Response(200, json={"data": {"torrent_id": 42}})
        )
        uploader = TorrustUploader(settings)

        try:
            assert await uploader.upload(_request(torrent_file, "series")) is True
        finally:
            await uploader.close()

        request = route.calls[0].request
        assert request.headers["Authorization"] == "ApiKey tracker-key"
        assert request.headers["Content-Type"].startswith("multipart/form-data")
        body = request.content
        assert b'name="title"' in body
        assert b"Heat.1995.1080p.BluRay.x264-GRP" in body
        assert b"tv shows" in body
        assert b"[3, 5]" in body
        assert b"application/x-bittorrent" in body
        assert b"d8:announce0:e" in body

    @pytest.mark.asyncio
    @respx.mock
    async def test_duplicate_is_success(
        self, settings: TorrustSettings, torrent_file: Path
    ) -> None:
        respx.post(UPLOAD_URL).mock(
            return_value=httpx.Response(
                409, json={"error": "This torrent infohash already exists in our database."}
            )
        )
        uploader = TorrustUploader(settings)

        try:
            assert await uploader.upload(_request(torrent_file)) is True
        finally:
            await uploader.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_error_status_raises(
        self, settings: TorrustSettings, torrent_file: Path
    ) -> None:
        respx.post(UPLOAD_URL).mock(return_value=httpx.Response(400, text="bad category"))
        uploader = TorrustUploader(settings)

        try:
            with pytest.raises(UploadError, match="400"):
                await uploader.upload(_request(torrent_file))
        finally:
            await uploader.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_network_error_raises(
        self, settings: TorrustSettings, torrent_file: Path
    ) -> None:
        respx.post(UPLOAD_URL).mock(side_effect=httpx.ConnectError("refused"))
        uploader = TorrustUploader(settings)

        try:
            with pytest.raises(UploadError):
                await uploader.upload(_request(torrent_file))
        finally:
            await uploader.close()

    @pytest.mark.asyncio
    async def test_missing_torrent_file_raises(
        self, settings: TorrustSettings, tmp_path: Path
    ) -> None:
        uploader = TorrustUploader(settings)
        with pytest.raises(UploadError):
            await uploader.upload(_request(tmp_path / "absent.torrent"))
