from __future__ import annotations
"""Fixed aggregation policy: ignored paths, directory scoping and text detection."""

from typing import List, Sequence

from ghmd.constants import IGNORE_FILES, KNOWN_TEXT_FILES, TEXT_EXTENSIONS
from ghmd.core.models import FileEntry

_TEXT_EXTENSIONS = tuple(ext.lower() for ext in TEXT_EXTENSIONS)


def is_text_file(path: str) -> bool:
    """Return True when *path* looks like a text file worth aggregating."""
    lowered = path.lower()
    if lowered.rsplit('/', 1)[-1] in KNOWN_TEXT_FILES:
        return True
    return lowered.endswith(_TEXT_EXTENSIONS)


def filter_ignored(files: Sequence[FileEntry], patterns: Sequence[str] = IGNORE_FILES) -> List[FileEntry]:
    """Drop entries matching the ignore list.

    Patterns containing '/' are path prefixes (or exact paths); the others
    must equal one of the path segments.
    """
    prefixes = [p for p in patterns if '/' in p]
    segments = {p for p in patterns if '/' not in p}

    def _ignored(path: str) -> bool:
        if any(path.startswith(p) or path == p for p in prefixes):
            return True
        return any(part in segments for part in path.split('/'))

    return [f for f in files if not _ignored(f.path)]


def filter_by_directory(files: Sequence[FileEntry], directory: str) -> List[FileEntry]:
    normalized = directory.rstrip('/')
    return [f for f in files if f.path.startswith(f'{normalized}/')]
