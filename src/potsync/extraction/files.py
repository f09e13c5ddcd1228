"""File system collection of scannable sources and catalogs.

Inputs may be files or directories. Directories are walked recursively in
sorted order, skipping IGNORED_DIRECTORIES. Inputs containing a wildcard
or naming a missing path are reported as skipped rather than raising.

Python 3.11+.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from potsync.constants import IGNORED_DIRECTORIES, MAX_SOURCE_SIZE

from .types import SourceUnit

__all__ = [
    "CollectedFiles",
    "collect_files",
    "normalize_extension",
    "read_sources",
    "relative_source_id",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CollectedFiles:
    """Result of collect_files().

    Attributes:
        files: Absolute paths of matching files, in walk order
        skipped: Inputs that were not collected (wildcards, missing paths)
    """

    files: tuple[Path, ...]
    skipped: tuple[str, ...]


def normalize_extension(extension: str) -> str:
    """Lower-case an extension and ensure it starts with a dot.

    Example:
        >>> normalize_extension("TSX")
        '.tsx'
    """
    extension = extension.lower()
    return extension if extension.startswith(".") else f".{extension}"


def _walk(directory: Path, extensions: frozenset[str]) -> Iterator[Path]:
    for root, dirnames, filenames in os.walk(directory):
        dirnames[:] = sorted(name for name in dirnames if name not in IGNORED_DIRECTORIES)
        for filename in sorted(filenames):
            path = Path(root, filename)
            if normalize_extension(path.suffix) in extensions and path.is_file():
                yield path


def collect_files(
    inputs: Iterable[str],
    *,
    cwd: str | Path | None = None,
    extensions: Iterable[str],
) -> CollectedFiles:
    """Collect files with matching extensions from files and directories.

    Args:
        inputs: File or directory paths, relative to cwd
        cwd: Base directory for relative inputs (default: current directory)
        extensions: Accepted extensions, with or without the leading dot

    Returns:
        Collected files and skipped inputs. A file is listed once even if
        several inputs reach it.
    """
    base = Path(cwd) if cwd is not None else Path.cwd()
    accepted = frozenset(normalize_extension(extension) for extension in extensions)
    files: dict[Path, None] = {}
    skipped: list[str] = []

    for raw in inputs:
        if "*" in raw:
            logger.warning("Skipping wildcard input %r; pass directories instead", raw)
            skipped.append(raw)
            continue
        full_path = (base / raw).resolve()
        if full_path.is_dir():
            files.update(dict.fromkeys(_walk(full_path, accepted)))
        elif full_path.is_file():
            if normalize_extension(full_path.suffix) in accepted:
                files[full_path] = None
        else:
            logger.warning("Skipping missing input %r", raw)
            skipped.append(raw)

    return CollectedFiles(files=tuple(files), skipped=tuple(skipped))


def relative_source_id(path: Path, cwd: str | Path | None = None) -> str:
    """Reference identifier of a file: its POSIX path relative to cwd.

    Files outside cwd keep their absolute path.
    """
    base = (Path(cwd) if cwd is not None else Path.cwd()).resolve()
    try:
        return path.resolve().relative_to(base).as_posix() or path.name
    except ValueError:
        return path.as_posix()


def read_sources(
    files: Iterable[Path],
    *,
    cwd: str | Path | None = None,
    max_size: int = MAX_SOURCE_SIZE,
) -> list[SourceUnit]:
    """Read files as SourceUnits identified by their relative path.

    Undecodable bytes are replaced rather than failing the whole run.
    Files longer than max_size characters are skipped with a warning.

    Raises:
        OSError: If a file cannot be read
    """
    units: list[SourceUnit] = []
    for path in files:
        text = path.read_text(encoding="utf-8", errors="replace")
        source_id = relative_source_id(path, cwd)
        if len(text) > max_size:
            logger.warning(
                "Skipping %s: %d characters exceeds limit of %d", source_id, len(text), max_size
            )
            continue
        units.append(SourceUnit(source_id=source_id, text=text))
    return units
