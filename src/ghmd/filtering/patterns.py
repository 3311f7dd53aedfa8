from __future__ import annotations
"""Single-pattern path matching used by include/exclude filters.

A raw pattern is classified once into exactly one kind, first rule wins:

    1. contains '*'          → GLOB: anchored, '*' matches any run of
                               characters; tested against the full path and
                               against the basename.
    2. starts with '.'       → SUFFIX: the path ends with the pattern.
    3. ends with '/'         → DIRECTORY: the path starts with the pattern or
                               contains '/' + pattern.
    4. contains '/'          → DIRECTORY (same rule as 3).
    5. anything else         → SEGMENT: basename equals the pattern, or the
                               pattern is a substring of the path.

Examples:
    matches_pattern("src/foo.test.ts", ".test.ts")  -> True
    matches_pattern("testing/foo.ts", "test/")      -> False
    matches_pattern("foo.test.ts", "*.test.*")      -> True
"""

import enum
import re
from dataclasses import dataclass, field
from typing import Optional, Pattern


class PatternKind(enum.Enum):
    GLOB = 'glob'
    SUFFIX = 'suffix'
    DIRECTORY = 'directory'
    SEGMENT = 'segment'


def _basename(path: str) -> str:
    return path.rsplit('/', 1)[-1]


@dataclass(frozen=True)
class FilterPattern:
    raw: str
    kind: PatternKind
    regex: Optional[Pattern[str]] = field(default=None, compare=False)

    def matches(self, path: str) -> bool:
        if self.kind is PatternKind.GLOB:
            assert self.regex is not None
            return bool(self.regex.fullmatch(path) or self.regex.fullmatch(_basename(path)))
        if self.kind is PatternKind.SUFFIX:
            return path.endswith(self.raw)
        if self.kind is PatternKind.DIRECTORY:
            return path.startswith(self.raw) or f'/{self.raw}' in path
        return _basename(path) == self.raw or self.raw in path


def compile_pattern(raw: str) -> FilterPattern:
    if '*' in raw:
        regex = re.compile('.*'.join(re.escape(chunk) for chunk in raw.split('*')), re.S)
        return FilterPattern(raw=raw, kind=PatternKind.GLOB, regex=regex)
    if raw.startswith('.'):
        return FilterPattern(raw=raw, kind=PatternKind.SUFFIX)
    if '/' in raw:
        return FilterPattern(raw=raw, kind=PatternKind.DIRECTORY)
    return FilterPattern(raw=raw, kind=PatternKind.SEGMENT)


def matches_pattern(file_path: str, pattern: str) -> bool:
    """Return True if *file_path* matches the raw *pattern*."""
    return compile_pattern(pattern).matches(file_path)
