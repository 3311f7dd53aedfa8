from __future__ import annotations

"""Repository file listing.

Two interchangeable backends share the ListingServiceProtocol contract:

    - UnghListingBackend: fast, cached mirror (ungh.cc); primary.
    - GitHubTreeListingBackend: recursive git tree from the GitHub API;
      authoritative but slower and more tightly rate-limited.

FallbackListingService tries the primary first and switches to the secondary
only when the primary reports RateLimited.
"""

import logging
from typing import List, Optional, Sequence

from ghmd.constants import GITHUB_API_BASE, UNGH_BASE
from ghmd.core.errors import NotFound, RateLimited, ServiceError
from ghmd.core.interfaces.net import HTTPTransportProtocol, ListingServiceProtocol
from ghmd.core.models import FetchResponse, FileEntry
from ghmd.github.http import HttpClient, decode_json, github_api_headers
from ghmd.logging.helpers import get_logger
from ghmd.utils.net import quote_segment


def _classify_listing_failure(resp: FetchResponse, backend: str) -> Exception:
    if resp.status == 404:
        return NotFound(f'{backend}: not found (404)', status=404, url=resp.final_url)
    if resp.status in (403, 429):
        return RateLimited(f'{backend} rate limit: {resp.status}', status=resp.status, url=resp.final_url)
    return ServiceError(f'{backend}: failed to fetch files ({resp.status})', status=resp.status, url=resp.final_url)


class UnghListingBackend(ListingServiceProtocol):
    def __init__(
        self,
        transport: HTTPTransportProtocol,
        *,
        base_url: str = UNGH_BASE,
        timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._log = logger or get_logger('listing')
        self._client = HttpClient(transport, timeout=timeout, logger=self._log)
        self._base = base_url.rstrip('/')

    async def list_files(self, owner: str, repo: str, branch: str) -> List[FileEntry]:
        url = f'{self._base}/repos/{owner}/{repo}/files/{quote_segment(branch)}'
        resp = await self._client.get(url)
        if not resp.ok:
            raise _classify_listing_failure(resp, 'ungh')

        data = decode_json(resp)
        files = data.get('files') if isinstance(data, dict) else None
        if not isinstance(files, list):
            raise ServiceError(f'ungh: unexpected payload for {owner}/{repo}@{branch}', url=url)
        return [
            FileEntry(
                path=str(item['path']),
                mode=str(item.get('mode', '')),
                sha=str(item.get('sha', '')),
                size=int(item.get('size') or 0),
            )
            for item in files
            if isinstance(item, dict) and item.get('path')
        ]


class GitHubTreeListingBackend(ListingServiceProtocol):
    def __init__(
        self,
        transport: HTTPTransportProtocol,
        *,
        base_url: str = GITHUB_API_BASE,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._log = logger or get_logger('listing')
        self._client = HttpClient(transport, timeout=timeout, logger=self._log)
        self._base = base_url.rstrip('/')
        self._token = token

    async def list_files(self, owner: str, repo: str, branch: str) -> List[FileEntry]:
        url = f'{self._base}/repos/{owner}/{repo}/git/trees/{quote_segment(branch)}?recursive=1'
        resp = await self._client.get(url, headers=github_api_headers(self._token))
        if not resp.ok:
            raise _classify_listing_failure(resp, 'github')

        data = decode_json(resp)
        tree = data.get('tree') if isinstance(data, dict) else None
        if not isinstance(tree, list):
            raise ServiceError(f'github: unexpected tree payload for {owner}/{repo}@{branch}', url=url)
        if data.get('truncated'):
            self._log.warning('⚠  tree listing for %s/%s@%s is truncated', owner, repo, branch)
        return [
            FileEntry(
                path=str(item['path']),
                mode=str(item.get('mode', '')),
                sha=str(item.get('sha', '')),
                size=int(item.get('size') or 0),
            )
            for item in tree
            if isinstance(item, dict) and item.get('type') == 'blob' and item.get('path')
        ]


class FallbackListingService(ListingServiceProtocol):
    """Primary backend first; secondary only when the primary is rate limited."""

    def __init__(
        self,
        primary: ListingServiceProtocol,
        secondary: ListingServiceProtocol,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._primary = primary
        self._secondary = secondary
        self._log = logger or get_logger('listing')

    async def list_files(self, owner: str, repo: str, branch: str) -> Sequence[FileEntry]:
        try:
            return await self._primary.list_files(owner, repo, branch)
        except RateLimited as exc:
            self._log.info('↪  %s; retrying %s/%s@%s against the GitHub API', exc, owner, repo, branch)
            return await self._secondary.list_files(owner, repo, branch)
