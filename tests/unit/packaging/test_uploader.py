"""Tests for PackageUploader."""

import io
import logging
import zipfile
from unittest.mock import patch

import httpx
import pytest

from ray_dashboard_sdk.core.exceptions import (
    ArchiveError,
    DashboardRequestError,
    InvalidPackageURIError,
    PackagingError,
)
from ray_dashboard_sdk.packaging.uploader import PackageUploader, temporary_package_path
from ray_dashboard_sdk.packaging.uri import get_uri_for_directory

PACKAGE_URI = "gcs://_ray_pkg_0123456789abcdef.zip"
PACKAGE_URL = "http://dashboard.test:8265/api/packages/gcs/_ray_pkg_0123456789abcdef.zip"


@pytest.fixture
def uploader(rest_client):
    return PackageUploader(rest_client)


@pytest.fixture
def temp_root(tmp_path):
    """Redirect temporary archives into a directory the test can inspect."""
    root = tmp_path / "tmp"
    root.mkdir()
    with patch(
        "ray_dashboard_sdk.packaging.uploader.tempfile.gettempdir",
        return_value=str(root),
    ):
        yield root


def _calls(mock_http_client):
    return [(c.args[0], c.args[1]) for c in mock_http_client.request.call_args_list]


class TestPackageExists:
    """Tests for package_exists."""

    @pytest.mark.asyncio
    async def test_found(self, uploader, mock_http_client, make_response):
        mock_http_client.request.return_value = make_response(200)

        assert await uploader.package_exists(PACKAGE_URI) is True
        assert _calls(mock_http_client) == [("GET", PACKAGE_URL)]

    @pytest.mark.asyncio
    async def test_not_found(self, uploader, mock_http_client, make_response):
        mock_http_client.request.return_value = make_response(404)

        assert await uploader.package_exists(PACKAGE_URI) is False

    @pytest.mark.asyncio
    async def test_unexpected_status(self, uploader, mock_http_client, make_response):
        mock_http_client.request.return_value = make_response(500, text="boom")

        with pytest.raises(DashboardRequestError) as exc_info:
            await uploader.package_exists(PACKAGE_URI)

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_invalid_uri_sends_nothing(self, uploader, mock_http_client):
        with pytest.raises(InvalidPackageURIError):
            await uploader.package_exists("not-a-uri")

        mock_http_client.request.assert_not_called()

    @pytest.mark.asyncio
    async def test_network_error_propagates(self, uploader, mock_http_client):
        mock_http_client.request.side_effect = httpx.ConnectError("refused")

        with pytest.raises(DashboardRequestError, match="refused"):
            await uploader.package_exists(PACKAGE_URI)

        assert mock_http_client.request.call_count == 1


class TestUploadPackage:
    """Tests for upload_package and upload_package_if_needed."""

    @pytest.mark.asyncio
    async def test_put_raw_bytes(self, uploader, mock_http_client, make_response):
        mock_http_client.request.return_value = make_response(200)

        await uploader.upload_package(PACKAGE_URI, b"zip-bytes")

        call = mock_http_client.request.call_args
        assert call.args == ("PUT", PACKAGE_URL)
        assert call.kwargs["content"] == b"zip-bytes"

    @pytest.mark.asyncio
    async def test_failure_status_raises(self, uploader, mock_http_client, make_response):
        mock_http_client.request.return_value = make_response(413, text="too large")

        with pytest.raises(DashboardRequestError, match="413"):
            await uploader.upload_package(PACKAGE_URI, b"zip-bytes")

    @pytest.mark.asyncio
    async def test_if_needed_skips_existing(self, uploader, mock_http_client, make_response):
        mock_http_client.request.return_value = make_response(200)

        await uploader.upload_package_if_needed(PACKAGE_URI, b"zip-bytes")

        assert _calls(mock_http_client) == [("GET", PACKAGE_URL)]

    @pytest.mark.asyncio
    async def test_if_needed_uploads_missing(self, uploader, mock_http_client, make_response):
        mock_http_client.request.side_effect = [make_response(404), make_response(200)]

        await uploader.upload_package_if_needed(PACKAGE_URI, b"zip-bytes")

        assert _calls(mock_http_client) == [("GET", PACKAGE_URL), ("PUT", PACKAGE_URL)]


class TestUploadPackageFile:
    """Tests for pre-built package uploads."""

    @pytest.mark.asyncio
    async def test_wheel_uploaded_under_its_name(
        self, uploader, mock_http_client, make_response, tmp_path
    ):
        wheel = tmp_path / "mylib-1.0-py3-none-any.whl"
        wheel.write_bytes(b"wheel-bytes")
        mock_http_client.request.return_value = make_response(200)

        uri = await uploader.upload_package_file(wheel)

        assert uri == "gcs://mylib-1.0-py3-none-any.whl"
        call = mock_http_client.request.call_args
        assert call.args == (
            "PUT",
            "http://dashboard.test:8265/api/packages/gcs/mylib-1.0-py3-none-any.whl",
        )
        assert call.kwargs["content"] == b"wheel-bytes"

    @pytest.mark.asyncio
    async def test_if_needed_skips_existing(
        self, uploader, mock_http_client, make_response, tmp_path
    ):
        wheel = tmp_path / "mylib-1.0-py3-none-any.whl"
        wheel.write_bytes(b"wheel-bytes")
        mock_http_client.request.return_value = make_response(200)

        await uploader.upload_package_file_if_needed(wheel)

        assert [c.args[0] for c in mock_http_client.request.call_args_list] == ["GET"]


class TestUploadDirectory:
    """Tests for directory uploads."""

    @pytest.mark.asyncio
    async def test_if_needed_uploads_zip_of_directory(
        self, uploader, mock_http_client, make_response, package_dir, temp_root
    ):
        mock_http_client.request.side_effect = [make_response(404), make_response(200)]

        uri = await uploader.upload_directory_if_needed(package_dir)

        assert uri == get_uri_for_directory(package_dir)
        put_call = mock_http_client.request.call_args_list[1]
        assert put_call.args[0] == "PUT"
        with zipfile.ZipFile(io.BytesIO(put_call.kwargs["content"])) as archive:
            assert sorted(archive.namelist()) == ["file1.txt", "file2.txt"]
            assert archive.read("file1.txt") == b"content1"
        assert list(temp_root.iterdir()) == []

    @pytest.mark.asyncio
    async def test_if_needed_skips_existing_without_building(
        self, uploader, mock_http_client, make_response, package_dir, temp_root
    ):
        mock_http_client.request.return_value = make_response(200)

        with patch(
            "ray_dashboard_sdk.packaging.uploader.PackageBuilder.build"
        ) as mock_build:
            uri = await uploader.upload_directory_if_needed(package_dir)

        assert uri == get_uri_for_directory(package_dir)
        mock_build.assert_not_called()
        assert [c.args[0] for c in mock_http_client.request.call_args_list] == ["GET"]

    @pytest.mark.asyncio
    async def test_temp_file_removed_when_build_fails(
        self, uploader, mock_http_client, make_response, package_dir, temp_root
    ):
        mock_http_client.request.return_value = make_response(404)

        with patch.object(zipfile.ZipFile, "write", side_effect=ValueError("bad entry")):
            with pytest.raises(ArchiveError):
                await uploader.upload_directory_if_needed(package_dir)

        assert list(temp_root.iterdir()) == []
        assert [c.args[0] for c in mock_http_client.request.call_args_list] == ["GET"]

    @pytest.mark.asyncio
    async def test_temp_file_removed_when_upload_fails(
        self, uploader, mock_http_client, make_response, package_dir, temp_root
    ):
        mock_http_client.request.side_effect = [
            make_response(404),
            make_response(500, text="storage unavailable"),
        ]

        with pytest.raises(DashboardRequestError):
            await uploader.upload_directory_if_needed(package_dir)

        assert list(temp_root.iterdir()) == []

    @pytest.mark.asyncio
    async def test_upload_directory_always_uploads(
        self, uploader, mock_http_client, make_response, package_dir, temp_root
    ):
        mock_http_client.request.return_value = make_response(200)

        await uploader.upload_directory(package_dir)

        assert [c.args[0] for c in mock_http_client.request.call_args_list] == ["PUT"]


class TestTemporaryPackagePath:
    """Tests for temporary_package_path."""

    def test_unique_and_removed(self, temp_root):
        with temporary_package_path() as first, temporary_package_path() as second:
            assert first != second
            first.write_bytes(b"x")

        assert not first.exists()
        assert not second.exists()

    def test_removed_on_error(self, temp_root):
        with pytest.raises(RuntimeError):
            with temporary_package_path() as path:
                path.write_bytes(b"x")
                raise RuntimeError("interrupted")

        assert not path.exists()

    def test_cleanup_failure_raises_packaging_error(self, temp_root):
        with patch.object(
            type(temp_root), "unlink", side_effect=PermissionError("read-only")
        ):
            with pytest.raises(PackagingError, match="Failed to remove temporary package"):
                with temporary_package_path():
                    pass

    def test_cleanup_failure_keeps_original_error(self, temp_root, caplog):
        with patch.object(
            type(temp_root), "unlink", side_effect=PermissionError("read-only")
        ):
            with caplog.at_level(logging.WARNING):
                with pytest.raises(ArchiveError, match="bad entry"):
                    with temporary_package_path():
                        raise ArchiveError("bad entry")

        assert "Failed to remove temporary package" in caplog.text
