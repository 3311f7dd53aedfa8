from __future__ import annotations

"""Reversible flat encoding of a reference (the "clean path" slug).

Layout::

    /<gh|ghf>_<owner>_<repo>@<encoded-branch>[_<path segment>...].<md|txt>

Branch escaping replaces '~' with '~~' first and '/' with '~s' second.
Decoding collapses '~~' into a sentinel before expanding '~s', so an escaped
tilde followed by 's' never reads as a slash.
"""

from typing import Optional

from ghmd.constants import DEFAULT_BRANCH
from ghmd.core.models import CleanPath, OutputFormat

_SENTINEL = '\x00'
_EXTENSIONS: tuple[OutputFormat, ...] = ('md', 'txt')


def encode_branch(branch: str) -> str:
    return branch.replace('~', '~~').replace('/', '~s')


def decode_branch(encoded: str) -> str:
    return encoded.replace('~~', _SENTINEL).replace('~s', '/').replace(_SENTINEL, '~')


def to_clean_path(
    owner: str,
    repo: str,
    branch: str,
    path: Optional[str] = None,
    is_file: bool = False,
    extension: OutputFormat = 'md',
) -> str:
    if extension not in _EXTENSIONS:
        raise ValueError(f'unsupported extension: {extension!r}')
    prefix = 'ghf' if is_file else 'gh'
    parts = [prefix, owner, f'{repo}@{encode_branch(branch)}']
    if path:
        parts.extend(path.split('/'))
    return f"/{'_'.join(parts)}.{extension}"


def parse_clean_path(clean_path: str) -> Optional[CleanPath]:
    """Decode a slug produced by `to_clean_path`; returns None when invalid."""
    slug = (clean_path or '').lstrip('/')
    if not slug.startswith(('gh_', 'ghf_')):
        return None
    extension: Optional[OutputFormat] = next((e for e in _EXTENSIONS if slug.endswith(f'.{e}')), None)
    if extension is None:
        return None

    parts = slug[: -(len(extension) + 1)].split('_')
    if len(parts) < 3:
        return None
    prefix, owner, repo_with_branch, *rest = parts
    if not owner or not repo_with_branch:
        return None

    repo, sep, encoded_branch = repo_with_branch.partition('@')
    if not repo:
        return None
    branch = decode_branch(encoded_branch) if sep else DEFAULT_BRANCH

    return CleanPath(
        owner=owner,
        repo=repo,
        branch=branch,
        path='/'.join(rest) if rest else None,
        is_file=prefix == 'ghf',
        extension=extension,
    )
