from __future__ import annotations
"""Parse `.gitmodules` files into GitHub-backed Submodule records.

Only `[submodule "<name>"]` blocks carrying both `path = ...` and
`url = ...` produce a record, and only when the URL resolves to a GitHub
owner/repository. SSH remotes (`git@github.com:owner/repo.git`) are
normalized to their HTTPS form first.
"""

import re
from typing import Dict, List, Optional, Tuple

from ghmd.core.models import Submodule

_SECTION_RE = re.compile(r'^\[submodule\s+"(.+)"\]$')
_PATH_RE = re.compile(r'^path\s*=\s*(.+)$')
_URL_RE = re.compile(r'^url\s*=\s*(.+)$')
_GITHUB_RE = re.compile(r'github\.com/([^/]+)/([^/]+)')


def parse_submodule_url(url: str) -> Optional[Tuple[str, str]]:
    """Return (owner, repo) for a GitHub remote URL, else None."""
    normalized = re.sub(r'^git@github\.com:', 'https://github.com/', url.strip())
    normalized = re.sub(r'\.git$', '', normalized)
    m = _GITHUB_RE.search(normalized)
    if not m or not m.group(1) or not m.group(2):
        return None
    return (m.group(1), m.group(2))


def _emit(current: Optional[Dict[str, str]], out: List[Submodule]) -> None:
    if not current or not current.get('path') or not current.get('url'):
        return
    parsed = parse_submodule_url(current['url'])
    if parsed is None:
        return
    owner, repo = parsed
    out.append(
        Submodule(name=current['name'], path=current['path'], url=current['url'], owner=owner, repo=repo)
    )


def parse_gitmodules(content: str) -> List[Submodule]:
    submodules: List[Submodule] = []
    current: Optional[Dict[str, str]] = None

    for line in content.splitlines():
        trimmed = line.strip()

        section = _SECTION_RE.match(trimmed)
        if section:
            _emit(current, submodules)
            current = {'name': section.group(1)}
            continue

        if current is None:
            continue
        m = _PATH_RE.match(trimmed)
        if m:
            current['path'] = m.group(1).strip()
            continue
        m = _URL_RE.match(trimmed)
        if m:
            current['url'] = m.group(1).strip()

    _emit(current, submodules)
    return submodules
