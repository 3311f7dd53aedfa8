from __future__ import annotations

import logging
from typing import Optional

from ghmd.constants import DEFAULT_BRANCH, GITHUB_API_BASE
from ghmd.core.errors import GhmdError
from ghmd.core.interfaces.net import HTTPTransportProtocol, MetadataServiceProtocol
from ghmd.github.http import HttpClient, decode_json, github_api_headers
from ghmd.logging.helpers import get_logger


class GitHubMetadataService(MetadataServiceProtocol):
    """Resolve a repository's default branch, falling back to 'main' on any failure."""

    def __init__(
        self,
        transport: HTTPTransportProtocol,
        *,
        base_url: str = GITHUB_API_BASE,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        fallback: str = DEFAULT_BRANCH,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._log = logger or get_logger('metadata')
        self._client = HttpClient(transport, timeout=timeout, logger=self._log)
        self._base = base_url.rstrip('/')
        self._token = token
        self._fallback = fallback

    async def get_default_branch(self, owner: str, repo: str) -> str:
        url = f'{self._base}/repos/{owner}/{repo}'
        try:
            resp = await self._client.get(url, headers=github_api_headers(self._token))
            if not resp.ok:
                self._log.debug('metadata for %s/%s returned %d; using %r', owner, repo, resp.status, self._fallback)
                return self._fallback
            data = decode_json(resp)
        except GhmdError as exc:
            self._log.warning('⚠  could not resolve default branch of %s/%s: %s', owner, repo, exc)
            return self._fallback

        branch = data.get('default_branch') if isinstance(data, dict) else None
        if not isinstance(branch, str) or not branch:
            return self._fallback
        return branch
