"""Content identifiers for uploaded packages."""

from pathlib import Path
from typing import Tuple

from ..config import RAY_PKG_PREFIX, RAY_PKG_PROTOCOL, WHEEL_EXTENSION
from ..core.exceptions import InvalidPackageURIError
from .builder import hash_directory, hash_file

URI_SEPARATOR = "://"


def is_remote_uri(value: str) -> bool:
    """Return True if value already carries a ``scheme://`` prefix."""
    return URI_SEPARATOR in value


def parse_uri(package_uri: str) -> Tuple[str, str]:
    """Split a package URI into (protocol, package_name).

    Raises:
        InvalidPackageURIError: If the URI is not ``<protocol>://<name>``.
    """
    parts = package_uri.split(URI_SEPARATOR)
    if len(parts) != 2 or not all(parts):
        raise InvalidPackageURIError(f"Invalid package URI: {package_uri}")
    return parts[0], parts[1]


def package_uri_for_hash(digest: str) -> str:
    return f"{RAY_PKG_PROTOCOL}{URI_SEPARATOR}{RAY_PKG_PREFIX}{digest}.zip"


def get_uri_for_directory(directory: Path) -> str:
    """Get the content-addressed URI of a directory's filtered tree."""
    return package_uri_for_hash(hash_directory(directory))


def get_uri_for_package(package_path: Path) -> str:
    """Get the URI of a pre-built package file.

    Wheels keep their file name. Anything else is addressed by a hash of
    its bytes.
    """
    package_path = Path(package_path)
    if package_path.suffix == WHEEL_EXTENSION:
        return f"{RAY_PKG_PROTOCOL}{URI_SEPARATOR}{package_path.name}"

    return package_uri_for_hash(hash_file(package_path))
