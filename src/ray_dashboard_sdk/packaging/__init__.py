from .builder import (
    FileEntry,
    PackageBuilder,
    create_package,
    hash_directory,
    hash_file,
)
from .uploader import PackageUploader
from .uri import get_uri_for_directory, get_uri_for_package, is_remote_uri, parse_uri

__all__ = [
    "FileEntry",
    "PackageBuilder",
    "PackageUploader",
    "create_package",
    "get_uri_for_directory",
    "get_uri_for_package",
    "hash_directory",
    "hash_file",
    "is_remote_uri",
    "parse_uri",
]
