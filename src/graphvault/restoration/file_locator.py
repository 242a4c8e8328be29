"""Dump file discovery."""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


def locate_files(
    directory: str | Path,
    prefix: str,
    exclude: Iterable[str] = (),
) -> list[Path]:
    """Find readable dump files whose name starts with a prefix.

    Only regular files directly inside ``directory`` are considered. The result
    is sorted by file name so that the assignment of files to workers is
    reproducible.

    Args:
        directory: Directory to scan (not recursive)
        prefix: Required file-name prefix, usually a dump tag
        exclude: Exact file names to skip even if they match the prefix
            (e.g. ``vertexlabel`` when scanning for ``vertex`` shards)

    Returns:
        Sorted list of matching file paths; empty if the directory is missing,
        unreadable, or has no match
    """
    excluded = set(exclude)
    try:
        entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
    except OSError as e:
        logger.warning(f"Cannot list dump directory {directory}: {e}")
        return []

    files = []
    for entry in entries:
        if not entry.name.startswith(prefix) or entry.name in excluded:
            continue
        try:
            is_file = entry.is_file()
        except OSError:
            is_file = False
        if is_file and os.access(entry.path, os.R_OK):
            files.append(Path(entry.path))
        else:
            logger.debug(f"Skipping {entry.path}: not a readable regular file")

    return files
