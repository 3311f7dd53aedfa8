from __future__ import annotations

"""Branch/path disambiguation.

A shorthand reference such as ``owner/repo/release/1.0/src`` does not say
where the branch name ends. Candidates are probed from the longest branch
prefix to the shortest by asking the listing service for that branch; the
first candidate that is not NotFound wins. Any other listing failure aborts
the resolution. When nothing matches, the default branch is used and every
segment becomes the sub-path.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from ghmd.core.errors import NotFound
from ghmd.core.interfaces.net import ListingServiceProtocol, MetadataServiceProtocol
from ghmd.core.models import Reference, ResolvedReference
from ghmd.logging.helpers import get_logger


class BranchResolver:
    def __init__(
        self,
        listing: ListingServiceProtocol,
        metadata: MetadataServiceProtocol,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._listing = listing
        self._metadata = metadata
        self._log = logger or get_logger('resolver')

    async def resolve_branch_and_path(
        self, owner: str, repo: str, segments: Sequence[str]
    ) -> Tuple[str, Optional[str]]:
        segs: List[str] = [s for s in segments if s]
        if not segs:
            return (await self._metadata.get_default_branch(owner, repo), None)

        for i in range(len(segs), 0, -1):
            branch = '/'.join(segs[:i])
            path = '/'.join(segs[i:]) or None
            try:
                await self._listing.list_files(owner, repo, branch)
            except NotFound:
                self._log.debug('branch candidate %r not found for %s/%s', branch, owner, repo)
                continue
            self._log.debug('resolved %s/%s → branch=%r path=%r', owner, repo, branch, path)
            return (branch, path)

        default_branch = await self._metadata.get_default_branch(owner, repo)
        self._log.debug('no branch candidate matched for %s/%s; using default %r', owner, repo, default_branch)
        return (default_branch, '/'.join(segs))

    async def resolve(self, ref: Reference) -> ResolvedReference:
        """Turn a parsed Reference into a ResolvedReference.

        A branch taken from a ``tree``/``blob`` marker is re-probed together
        with the path, because a branch containing '/' cannot be told apart
        from the path by the URL alone.
        """
        path_segments = ref.path.split('/') if ref.path else []
        if ref.branch and not path_segments:
            branch, path = ref.branch, None
        else:
            segments = ([ref.branch] if ref.branch else []) + path_segments
            branch, path = await self.resolve_branch_and_path(ref.owner, ref.repo, segments)
        kind = ref.kind
        if kind == 'directory' and not path:
            kind = 'repo'
        return ResolvedReference(owner=ref.owner, repo=ref.repo, branch=branch, kind=kind, path=path)
