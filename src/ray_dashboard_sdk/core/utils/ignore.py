"""Ignore pattern matching utilities for package builds."""

import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import List, Tuple

import pathspec

from ..exceptions import PackagingError

log = logging.getLogger(__name__)

IGNORE_FILE_NAMES = (".gitignore", ".ignore")

HIDDEN_PREFIX = "."


def is_hidden(path: Path) -> bool:
    """Return True for dotfiles and dot-directories, VCS metadata included."""
    return path.name.startswith(HIDDEN_PREFIX)


def parse_ignore_file(file_path: Path) -> list[str]:
    """
    Parse an ignore file and return list of patterns.

    Args:
        file_path: Path to ignore file (.gitignore or .ignore)

    Returns:
        List of pattern strings
    """
    if not file_path.exists():
        return []

    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        log.warning(f"Failed to read {file_path}: {e}")
        return []

    patterns = []
    for line in content.splitlines():
        stripped = line.strip()
        # Skip empty lines and comments
        if stripped and not stripped.startswith("#"):
            patterns.append(line.rstrip())

    return patterns


def load_ignore_patterns(directory: Path) -> pathspec.PathSpec | None:
    """
    Load ignore patterns declared by the ignore files of a single directory.

    Args:
        directory: Directory whose .gitignore/.ignore files are read

    Returns:
        PathSpec matching paths relative to ``directory``, or None if the
        directory declares no patterns
    """
    patterns = []
    for name in IGNORE_FILE_NAMES:
        ignore_file = directory / name
        if ignore_file.is_file():
            file_patterns = parse_ignore_file(ignore_file)
            patterns.extend(file_patterns)
            log.debug(f"Loaded {len(file_patterns)} patterns from {ignore_file}")

    if not patterns:
        return None

    # gitignore-style matching
    return pathspec.PathSpec.from_lines("gitwildmatch", patterns)


@dataclass(frozen=True)
class IgnoreRule:
    """Patterns scoped to the directory that declared them."""

    base: PurePosixPath
    spec: pathspec.PathSpec

    def matches(self, rel_path: PurePosixPath, is_dir: bool) -> bool:
        if self.base != PurePosixPath("."):
            try:
                rel_path = rel_path.relative_to(self.base)
            except ValueError:
                return False

        candidate = rel_path.as_posix()
        # Directory-only patterns ("build/") need the trailing slash to match
        if is_dir:
            candidate += "/"
        return self.spec.match_file(candidate)


def should_ignore(
    rel_path: PurePosixPath, is_dir: bool, rules: Tuple[IgnoreRule, ...]
) -> bool:
    """
    Check if a root-relative path should be ignored by any active rule.

    Args:
        rel_path: Path relative to the package root
        is_dir: Whether the path names a directory
        rules: Rules declared by the root and every ancestor directory

    Returns:
        True if the path should be ignored
    """
    return any(rule.matches(rel_path, is_dir) for rule in rules)


@dataclass
class FileTree:
    """Result of walking a package root."""

    root: Path
    files: List[Path] = field(default_factory=list)
    directories: List[Path] = field(default_factory=list)


def get_file_tree(root: Path) -> FileTree:
    """
    Recursively collect all files and subdirectories under root, excluding
    ignored paths.

    Hidden entries (names starting with a dot) are never collected, which
    also keeps .git, .hg and .svn out of packages. Ignore files are still
    read even though they are hidden themselves.

    Entries that cannot be read are logged and skipped. Symlinked files are
    included, symlinked directories are not descended into.

    Args:
        root: Directory to scan

    Returns:
        FileTree with included files and subdirectories (root excluded)

    Raises:
        PackagingError: If root itself cannot be listed
    """
    root = Path(root)
    if not root.is_dir():
        raise PackagingError(f"Package source is not a directory: {root}")

    tree = FileTree(root=root)

    try:
        entries = list(root.iterdir())
    except OSError as e:
        raise PackagingError(f"Cannot read package source {root}: {e}") from e

    _walk(root, PurePosixPath("."), entries, (), tree)
    return tree


def _walk(
    directory: Path,
    rel_dir: PurePosixPath,
    entries: List[Path],
    rules: Tuple[IgnoreRule, ...],
    tree: FileTree,
) -> None:
    spec = load_ignore_patterns(directory)
    if spec is not None:
        rules = rules + (IgnoreRule(rel_dir, spec),)

    for item in sorted(entries):
        rel_path = rel_dir / item.name

        if is_hidden(item):
            log.debug(f"Skipping hidden entry: {rel_path}")
            continue

        try:
            is_symlink = item.is_symlink()
            is_dir = item.is_dir()
            is_file = item.is_file()
        except OSError as e:
            log.warning(f"Skipping {rel_path}: {e}")
            continue

        if should_ignore(rel_path, is_dir and not is_symlink, rules):
            log.debug(f"Ignoring: {rel_path}")
            continue

        if is_file:
            tree.files.append(item)
        elif is_dir and not is_symlink:
            try:
                children = list(item.iterdir())
            except OSError as e:
                log.warning(f"Skipping unreadable directory {rel_path}: {e}")
                continue
            tree.directories.append(item)
            _walk(item, rel_path, children, rules, tree)
        elif is_symlink:
            log.warning(f"Skipping broken or directory symlink: {rel_path}")
