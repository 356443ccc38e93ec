"""Overlay archive extraction.

The template ships a zip next to its plain files. Every entry in it is written
over whatever the directory merge laid down, so the archive has the final say
for any path present in both.
"""
import zipfile
import zlib
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Iterator, List, Optional

from isicreate.core.logger import get_logger
from isicreate.scaffold.errors import ArchiveError, ArchiveNotFoundError

logger = get_logger(__name__)


@dataclass(frozen=True)
class ArchiveEntry:
    """A single file or directory record read from the overlay archive."""
    relative_path: str
    is_directory: bool
    data: Optional[bytes] = None  # None for directories


@dataclass
class ExtractStats:
    """Entries applied to the destination, in archive order."""
    directories: List[str] = field(default_factory=list)
    files: List[str] = field(default_factory=list)
    rejected: List[str] = field(default_factory=list)  # would escape the destination


def iter_entries(archive_path: Path) -> Iterator[ArchiveEntry]:
    """Yield the archive's entries in its native enumeration order.

    Raises:
        ArchiveNotFoundError: If archive_path does not exist
        ArchiveError: If the file is not a readable zip archive, or an entry is
            damaged, encrypted or uses an unsupported compression method
    """
    archive_path = Path(archive_path)
    if not archive_path.is_file():
        raise ArchiveNotFoundError(f"Overlay archive not found: {archive_path}")

    try:
        with zipfile.ZipFile(archive_path, "r") as zip_ref:
            for info in zip_ref.infolist():
                if info.is_dir():
                    yield ArchiveEntry(info.filename, True)
                else:
                    yield ArchiveEntry(info.filename, False, zip_ref.read(info))
    except (zipfile.BadZipFile, zipfile.LargeZipFile, zlib.error, EOFError,
            RuntimeError, NotImplementedError) as exc:
        raise ArchiveError(f"Cannot read overlay archive {archive_path}: {exc}") from exc


def _resolve_target(destination: Path, relative_path: str) -> Optional[Path]:
    """Map an entry name onto the destination, or None if it would escape it."""
    entry = PurePosixPath(relative_path.replace("\\", "/"))
    if entry.is_absolute() or ".." in entry.parts:
        return None
    parts = [part for part in entry.parts if part not in ("", ".")]
    if not parts:
        return None
    return destination.joinpath(*parts)


def apply_entry(entry: ArchiveEntry, destination: Path) -> Optional[Path]:
    """Recreate one entry under destination, overwriting existing files.

    Returns:
        The path written, or None if the entry was rejected
    """
    target = _resolve_target(destination, entry.relative_path)
    if target is None:
        logger.warning(f"Skipping archive entry outside the project: {entry.relative_path}")
        return None

    if entry.is_directory:
        target.mkdir(parents=True, exist_ok=True)
    else:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(entry.data or b"")
    return target


def extract_archive(archive_path: Path, destination: Path) -> ExtractStats:
    """Apply every archive entry to destination.

    Directory entries are ensured (no-op if present); file entries always
    replace the file at their path. When a path appears more than once the
    last entry wins.

    Args:
        archive_path: Zip file to read
        destination: Project root the entries are relative to

    Returns:
        ExtractStats describing what was applied

    Raises:
        ArchiveNotFoundError: If archive_path does not exist
        ArchiveError: If the archive is corrupt
    """
    destination = Path(destination)
    stats = ExtractStats()

    # Read everything first so a damaged entry leaves the destination untouched
    entries = list(iter_entries(archive_path))

    for entry in entries:
        if apply_entry(entry, destination) is None:
            stats.rejected.append(entry.relative_path)
        elif entry.is_directory:
            logger.debug(f"📁 Directory created/updated: {entry.relative_path}")
            stats.directories.append(entry.relative_path)
        else:
            logger.debug(f"📄 File created/updated: {entry.relative_path}")
            stats.files.append(entry.relative_path)

    logger.info(
        f"Applied {len(stats.files)} files and {len(stats.directories)} directories "
        f"from {Path(archive_path).name}"
    )
    return stats
