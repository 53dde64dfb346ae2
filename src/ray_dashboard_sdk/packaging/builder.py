"""Content-addressed package builder.

Walks a directory with ignore-file filtering, hashes the included files into
a deterministic identity and writes them into a deflated zip archive.
"""

import hashlib
import logging
import os
import zipfile
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import List, Optional

from ..core.exceptions import ArchiveError, PackagingError
from ..core.utils.ignore import FileTree, get_file_tree

log = logging.getLogger(__name__)

# Read buffer for hashing single artifacts
HASH_CHUNK_SIZE = 1024 * 1024

# drwxrwxr-x plus the MS-DOS directory flag
ZIP_DIRECTORY_ATTR = (0o40775 << 16) | 0x10


def entry_name(rel_path: str) -> str:
    """Name a root-relative path the way it is hashed and archived.

    Bytes that are not valid UTF-8 (surrogate-escaped by the filesystem
    layer) become U+FFFD, so every name encodes cleanly.
    """
    return os.fsencode(rel_path).decode("utf-8", errors="replace")


@dataclass(frozen=True)
class FileEntry:
    """A file included in a package, keyed by its root-relative path."""

    path: str
    source: Path

    @property
    def sort_key(self) -> tuple:
        return PurePosixPath(self.path).parts

    def read_bytes(self) -> bytes:
        try:
            return self.source.read_bytes()
        except OSError as e:
            raise PackagingError(f"Cannot read {self.source}: {e}") from e


class PackageBuilder:
    """Builds the identity and archive of one directory.

    The filtered file tree is scanned once per builder, so the hash and the
    archive produced by the same instance always describe the same files.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self._tree: Optional[FileTree] = None

    def _scan(self) -> FileTree:
        if self._tree is None:
            self._tree = get_file_tree(self.directory)
            log.debug(
                f"Scanned {self.directory}: {len(self._tree.files)} files, "
                f"{len(self._tree.directories)} directories"
            )
        return self._tree

    def _relative(self, path: Path) -> str:
        return entry_name(path.relative_to(self.directory).as_posix())

    def collect_files(self) -> List[FileEntry]:
        """Return the included files sorted by root-relative path."""
        tree = self._scan()
        entries = [FileEntry(self._relative(p), p) for p in tree.files]
        return sorted(entries, key=lambda entry: entry.sort_key)

    def collect_directories(self) -> List[str]:
        """Return the included subdirectories as root-relative paths."""
        tree = self._scan()
        return sorted(
            (self._relative(p) for p in tree.directories),
            key=lambda rel: PurePosixPath(rel).parts,
        )

    def hash(self) -> str:
        """Compute the SHA-1 hex digest over every (path, content) pair.

        Paths are fed slash-separated so the digest does not depend on the
        platform.
        """
        hasher = hashlib.sha1()
        for entry in self.collect_files():
            hasher.update(entry.path.encode("utf-8"))
            hasher.update(entry.read_bytes())
        return hasher.hexdigest()

    def build(self, output_path: Path) -> Path:
        """Write the filtered tree into a deflated zip archive.

        Raises:
            PackagingError: If a source file is unreadable or the destination
                cannot be created.
            ArchiveError: If the zip writer rejects an entry.
        """
        output_path = Path(output_path)
        log.debug(f"Creating package from {self.directory} to {output_path}")

        directories = self.collect_directories()
        files = self.collect_files()

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            archive = zipfile.ZipFile(
                output_path, "w", compression=zipfile.ZIP_DEFLATED, strict_timestamps=False
            )
        except OSError as e:
            raise PackagingError(f"Cannot create package {output_path}: {e}") from e

        try:
            with archive:
                for rel_dir in directories:
                    log.debug(f"Adding directory to zip: {rel_dir}")
                    info = zipfile.ZipInfo(f"{rel_dir}/")
                    info.external_attr = ZIP_DIRECTORY_ATTR
                    archive.writestr(info, b"")

                for entry in files:
                    log.debug(f"Adding file to zip: {entry.path}")
                    archive.write(entry.source, arcname=entry.path)
        except PackagingError:
            output_path.unlink(missing_ok=True)
            raise
        except (zipfile.LargeZipFile, zipfile.BadZipFile, ValueError) as e:
            output_path.unlink(missing_ok=True)
            raise ArchiveError(f"Failed to write package {output_path}: {e}") from e
        except OSError as e:
            output_path.unlink(missing_ok=True)
            raise PackagingError(f"Failed to write package {output_path}: {e}") from e

        log.debug(f"Package created successfully at {output_path}")
        return output_path


def hash_directory(directory: Path) -> str:
    """Compute the content hash of a directory's filtered tree."""
    return PackageBuilder(directory).hash()


def create_package(source_dir: Path, output_path: Path) -> Path:
    """Create a zip package from a directory's filtered tree."""
    return PackageBuilder(source_dir).build(output_path)


def hash_file(file_path: Path) -> str:
    """Compute the SHA-1 hex digest of a single file."""
    hasher = hashlib.sha1()
    try:
        with open(file_path, "rb") as f:
            for chunk in iter(lambda: f.read(HASH_CHUNK_SIZE), b""):
                hasher.update(chunk)
    except OSError as e:
        raise PackagingError(f"Cannot read {file_path}: {e}") from e
    return hasher.hexdigest()
