from __future__ import annotations

"""Parse GitHub-style references.

Accepted forms:
    - "owner/repo"
    - "https://github.com/owner/repo" (also "www.github.com", "http://", no scheme)
    - ".../tree/<branch>[/<path>]"  → directory
    - ".../blob/<branch>/<path>"    → file
    - ".../<path>"                  → shorthand; file or directory is guessed
                                      from the last component and the branch
                                      is left for the disambiguator.
"""

import re

from ghmd.constants import KNOWN_EXTENSIONLESS_FILES
from ghmd.core.errors import InvalidReference
from ghmd.core.models import Reference, ReferenceKind

_GITHUB_PREFIX_RE = re.compile(r'^(?:https?://)?(?:www\.)?github\.com/', re.I)


def classify_kind(path: str) -> ReferenceKind:
    """Guess whether *path* names a file or a directory from its last component."""
    name = path.rstrip('/').rsplit('/', 1)[-1].lower()
    if '.' in name or name in KNOWN_EXTENSIONLESS_FILES:
        return 'file'
    return 'directory'


def looks_like_clean_path(value: str) -> bool:
    v = (value or '').strip().lstrip('/')
    return v.startswith(('gh_', 'ghf_')) and v.endswith(('.md', '.txt'))


def parse_github_url(url: str) -> Reference:
    """Parse *url* into a Reference.

    Raises:
        InvalidReference: when owner or repository is missing.
    """
    cleaned = _GITHUB_PREFIX_RE.sub('', (url or '').strip()).rstrip('/')
    parts = cleaned.split('/')
    owner = parts[0] if parts else ''
    repo = parts[1] if len(parts) > 1 else ''
    if not owner or not repo:
        raise InvalidReference(f'Invalid GitHub URL: missing owner or repo ({url!r})')

    if len(parts) == 2:
        return Reference(owner=owner, repo=repo, kind='repo')

    marker = parts[2]
    if marker in ('blob', 'tree'):
        branch = parts[3] if len(parts) > 3 else None
        path = '/'.join(parts[4:]) or None
        kind: ReferenceKind = 'file' if marker == 'blob' else 'directory'
        return Reference(owner=owner, repo=repo, kind=kind, branch=branch or None, path=path)

    short_path = '/'.join(parts[2:])
    return Reference(owner=owner, repo=repo, kind=classify_kind(short_path), path=short_path)
