"""Deduplicated package uploads to the Ray dashboard.

Packages are addressed by content, so a package that already exists on the
cluster never needs to be sent again. Two processes may both see a package
as missing and both upload it; the dashboard keeps the last write, and both
writes carry identical bytes.
"""

import asyncio
import logging
import tempfile
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from ..core.api.dashboard import DashboardRestClient
from ..core.exceptions import DashboardRequestError, PackagingError
from .builder import PackageBuilder
from .uri import get_uri_for_package, package_uri_for_hash, parse_uri

log = logging.getLogger(__name__)


@contextmanager
def temporary_package_path() -> Iterator[Path]:
    """Yield a process-unique archive path that is removed on exit."""
    path = Path(tempfile.gettempdir()) / f"ray_pkg_{uuid.uuid4().hex}.zip"
    try:
        yield path
    except BaseException:
        # Keep the original failure; a cleanup error is only logged
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            log.warning(f"Failed to remove temporary package {path}: {e}")
        raise

    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        raise PackagingError(f"Failed to remove temporary package {path}: {e}") from e


def _read_file(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise PackagingError(f"Cannot read {path}: {e}") from e


class PackageUploader:
    """Package operations against the dashboard's ``/api/packages`` surface."""

    def __init__(self, rest: DashboardRestClient):
        self.rest = rest

    @staticmethod
    def _package_path(package_uri: str) -> str:
        protocol, package_name = parse_uri(package_uri)
        return f"/api/packages/{protocol}/{package_name}"

    async def package_exists(self, package_uri: str) -> bool:
        """Check whether a package is already stored on the cluster.

        Raises:
            InvalidPackageURIError: If the URI is malformed.
            DashboardRequestError: On any answer other than 200 or 404.
        """
        path = self._package_path(package_uri)
        response = await self.rest.execute_rest("GET", path)

        if response.status_code == 200:
            return True
        if response.status_code == 404:
            return False

        raise DashboardRequestError(
            f"Unexpected status code checking package existence: {response.status_code}",
            status_code=response.status_code,
            body=response.text,
        )

    async def upload_package(self, package_uri: str, data: bytes) -> None:
        """Upload raw package bytes under the given URI."""
        path = self._package_path(package_uri)

        log.debug(f"Uploading package {package_uri} ({len(data)} bytes)")
        response = await self.rest.execute_rest("PUT", path, content=data)
        self.rest.check_status(response, f"Upload of {package_uri}")

        log.info(f"Uploaded package {package_uri}")

    async def upload_package_if_needed(self, package_uri: str, data: bytes) -> None:
        """Upload the package unless the cluster already has it."""
        if await self.package_exists(package_uri):
            log.debug(f"Package {package_uri} already exists, skipping upload")
            return

        await self.upload_package(package_uri, data)

    async def upload_package_file(self, package_path: Path) -> str:
        """Upload a pre-built package file and return its URI."""
        package_path = Path(package_path)
        package_uri = await asyncio.to_thread(get_uri_for_package, package_path)
        data = await asyncio.to_thread(_read_file, package_path)

        await self.upload_package(package_uri, data)
        return package_uri

    async def upload_package_file_if_needed(self, package_path: Path) -> str:
        """Upload a pre-built package file unless the cluster already has it."""
        package_path = Path(package_path)
        package_uri = await asyncio.to_thread(get_uri_for_package, package_path)

        if await self.package_exists(package_uri):
            log.debug(f"Package {package_uri} already exists, skipping upload")
        else:
            data = await asyncio.to_thread(_read_file, package_path)
            await self.upload_package(package_uri, data)

        return package_uri

    async def upload_directory(self, directory: Path) -> str:
        """Package a directory and upload it unconditionally."""
        builder = PackageBuilder(directory)
        package_uri = package_uri_for_hash(await asyncio.to_thread(builder.hash))

        data = await self._build_archive(builder)
        await self.upload_package(package_uri, data)
        return package_uri

    async def upload_directory_if_needed(self, directory: Path) -> str:
        """Package and upload a directory unless its content is already stored.

        Returns:
            The directory's content-addressed package URI.
        """
        builder = PackageBuilder(directory)
        package_uri = package_uri_for_hash(await asyncio.to_thread(builder.hash))

        if await self.package_exists(package_uri):
            log.debug(f"Package {package_uri} already exists, skipping upload")
            return package_uri

        data = await self._build_archive(builder)
        await self.upload_package(package_uri, data)
        return package_uri

    async def _build_archive(self, builder: PackageBuilder) -> bytes:
        # The archive is complete before any byte of it is read
        with temporary_package_path() as archive_path:
            await asyncio.to_thread(builder.build, archive_path)
            return await asyncio.to_thread(_read_file, archive_path)
