from __future__ import annotations
"""
Recursive, cycle-safe traversal of git submodules.

Starting from a repository listing that contains `.gitmodules`, every
declared GitHub submodule is fetched concurrently: default branch, listing,
the first `file_cap` text files (through the bounded mapper) and then its own
submodules one level deeper. Nested file paths are re-rooted under the path
of the submodule that declared them, so a depth-2 file surfaces as
``outer/inner/file``.

A TraversalContext carries the visited set for one top-level request. A
repository is marked visited when its `.gitmodules` is expanded; meeting a
visited repository again yields a "Circular reference detected" result
instead of another descent.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set

from ghmd.constants import (
    CIRCULAR_REFERENCE,
    DEFAULT_CONCURRENCY,
    DEFAULT_MAX_SUBMODULE_DEPTH,
    DEFAULT_SUBMODULE_FILE_CAP,
    FAILED_PLACEHOLDER,
)
from ghmd.core.errors import describe
from ghmd.core.interfaces.net import (
    ContentServiceProtocol,
    ListingServiceProtocol,
    MetadataServiceProtocol,
)
from ghmd.core.models import FileEntry, Submodule, SubmoduleFile, SubmoduleResult
from ghmd.discovery.gitmodules import parse_gitmodules
from ghmd.execution.mapper import map_bounded
from ghmd.filtering.policy import is_text_file
from ghmd.logging.helpers import get_logger

GITMODULES = '.gitmodules'


@dataclass
class TraversalContext:
    """Per-request traversal state; never shared between requests."""
    visited: Set[str] = field(default_factory=set)


class SubmoduleRecursor:
    def __init__(
        self,
        listing: ListingServiceProtocol,
        content: ContentServiceProtocol,
        metadata: MetadataServiceProtocol,
        *,
        max_depth: int = DEFAULT_MAX_SUBMODULE_DEPTH,
        file_cap: int = DEFAULT_SUBMODULE_FILE_CAP,
        concurrency: int = DEFAULT_CONCURRENCY,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._listing = listing
        self._content = content
        self._metadata = metadata
        self._max_depth = max_depth
        self._file_cap = file_cap
        self._concurrency = concurrency
        self._log = logger or get_logger('submodules')

    async def fetch(
        self,
        owner: str,
        repo: str,
        branch: str,
        files: Sequence[FileEntry],
        *,
        ctx: Optional[TraversalContext] = None,
        depth: int = 0,
    ) -> List[SubmoduleResult]:
        """Return one result per reachable submodule of owner/repo@branch."""
        ctx = ctx if ctx is not None else TraversalContext()
        key = f'{owner}/{repo}'
        if depth >= self._max_depth or key in ctx.visited:
            return []
        if not any(f.path == GITMODULES for f in files):
            return []
        ctx.visited.add(key)

        try:
            raw = await self._content.get_file(owner, repo, branch, GITMODULES)
        except Exception as exc:
            self._log.warning('⚠  could not read %s of %s@%s: %s', GITMODULES, key, branch, exc)
            return []

        submodules = parse_gitmodules(raw)
        if not submodules:
            return []
        self._log.info('✔ %s declares %d submodule(s) (depth %d)', key, len(submodules), depth)

        batches = await asyncio.gather(*(self._fetch_one(sm, ctx, depth) for sm in submodules))
        return [result for batch in batches for result in batch]

    async def _fetch_one(self, sm: Submodule, ctx: TraversalContext, depth: int) -> List[SubmoduleResult]:
        if sm.key in ctx.visited:
            self._log.info('↪  %s at %s already visited; not descending', sm.key, sm.path)
            return [SubmoduleResult(submodule=sm, error=CIRCULAR_REFERENCE)]

        results: List[SubmoduleResult] = []
        try:
            branch = await self._metadata.get_default_branch(sm.owner, sm.repo)
            sub_files = await self._listing.list_files(sm.owner, sm.repo, branch)
            candidates = [f for f in sub_files if is_text_file(f.path)][: self._file_cap]

            async def _read(entry: FileEntry) -> SubmoduleFile:
                path = f'{sm.path}/{entry.path}'
                try:
                    text = await self._content.get_file(sm.owner, sm.repo, branch, entry.path)
                except Exception as exc:
                    self._log.warning('⚠  could not fetch %s from %s: %s', entry.path, sm.key, describe(exc))
                    return SubmoduleFile(path=path, content=FAILED_PLACEHOLDER)
                return SubmoduleFile(path=path, content=text)

            contents = await map_bounded(candidates, _read, self._concurrency)
            results.append(SubmoduleResult(submodule=sm, files=tuple(contents)))

            nested = await self.fetch(sm.owner, sm.repo, branch, sub_files, ctx=ctx, depth=depth + 1)
            results.extend(n.with_prefix(sm.path) for n in nested)
        except Exception as exc:
            self._log.warning('⚠  submodule %s (%s) failed: %s', sm.name, sm.key, exc)
            results.append(SubmoduleResult(submodule=sm, error=describe(exc)))
        return results
