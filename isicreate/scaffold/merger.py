"""Base copy of a template tree into a project directory."""
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Iterable, List

from isicreate.core.logger import get_logger

logger = get_logger(__name__)


@dataclass
class MergeStats:
    """What a merge copied and what it left alone."""
    copied: List[str] = field(default_factory=list)
    kept: List[str] = field(default_factory=list)  # already present at destination
    excluded: List[str] = field(default_factory=list)


def _prefixes(excluded: Iterable[str]) -> List[str]:
    return [PurePosixPath(prefix).as_posix() for prefix in excluded if prefix]


def is_excluded(relative: Path, prefixes: List[str]) -> bool:
    """True if the relative path, in POSIX form, starts with an excluded prefix.

    Matching is on the plain string, so excluding ``.git`` also excludes
    ``.gitignore``, ``.gitattributes`` and ``.github``.
    """
    posix = relative.as_posix()
    return any(posix.startswith(prefix) for prefix in prefixes)


def merge_directory(source: Path, destination: Path, excluded: Iterable[str] = ()) -> MergeStats:
    """Copy every path under source into destination without overwriting.

    Excluded prefixes are skipped together with their whole subtree. Files that
    already exist at the destination are left untouched, so the first writer
    wins. Directories are created as needed; filesystem errors propagate.

    Args:
        source: Template root to copy from
        destination: Project root to copy into
        excluded: Relative path prefixes to skip (e.g. ".git", "node_modules")

    Returns:
        MergeStats with the relative paths copied, kept and excluded
    """
    source = Path(source)
    destination = Path(destination)
    prefixes = _prefixes(excluded)
    stats = MergeStats()

    destination.mkdir(parents=True, exist_ok=True)

    for current, dirnames, filenames in os.walk(source):
        current_path = Path(current)
        relative_dir = current_path.relative_to(source)

        # Prune excluded directories in place so os.walk never descends into them
        for dirname in sorted(dirnames):
            relative = relative_dir / dirname
            if is_excluded(relative, prefixes):
                stats.excluded.append(relative.as_posix())
                dirnames.remove(dirname)
            else:
                (destination / relative).mkdir(parents=True, exist_ok=True)

        for filename in sorted(filenames):
            relative = relative_dir / filename
            if is_excluded(relative, prefixes):
                stats.excluded.append(relative.as_posix())
                continue

            target = destination / relative
            if target.exists() or target.is_symlink():
                stats.kept.append(relative.as_posix())
                continue

            shutil.copy2(current_path / filename, target)
            stats.copied.append(relative.as_posix())

    logger.debug(
        f"Merged {source} into {destination}: {len(stats.copied)} copied, "
        f"{len(stats.kept)} kept, {len(stats.excluded)} excluded"
    )
    return stats
