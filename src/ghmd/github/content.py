from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from ghmd.constants import DEFAULT_BACKOFF_BASE, DEFAULT_RETRIES, RAW_GITHUB_BASE
from ghmd.core.errors import ContentFetchError, NotFound, TransientError
from ghmd.core.interfaces.net import ContentServiceProtocol, HTTPTransportProtocol
from ghmd.github.http import HttpClient
from ghmd.logging.helpers import get_logger
from ghmd.utils.net import quote_path, quote_segment


class RawContentService(ContentServiceProtocol):
    """Fetch raw file text from raw.githubusercontent.com.

    429 and 5xx responses are retried up to `retries` attempts with an
    exponential delay of `backoff_base * 2**attempt` seconds. 404 raises
    NotFound; any other non-2xx status raises ContentFetchError at once.
    """

    def __init__(
        self,
        transport: HTTPTransportProtocol,
        *,
        base_url: str = RAW_GITHUB_BASE,
        retries: int = DEFAULT_RETRIES,
        backoff_base: float = DEFAULT_BACKOFF_BASE,
        timeout: Optional[float] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._log = logger or get_logger('content')
        self._client = HttpClient(transport, timeout=timeout, logger=self._log)
        self._base = base_url.rstrip('/')
        self._retries = max(1, int(retries))
        self._backoff = float(backoff_base)
        self._sleep = sleep

    def url_for(self, owner: str, repo: str, branch: str, path: str) -> str:
        return f'{self._base}/{owner}/{repo}/{quote_segment(branch)}/{quote_path(path)}'

    async def _fetch_once(self, url: str, path: str) -> str:
        resp = await self._client.get(url)
        if resp.ok:
            return resp.body.decode('utf-8', errors='replace')
        if resp.status == 429 or resp.status >= 500:
            raise TransientError(f'Failed to fetch file: {resp.status}', status=resp.status, url=url)
        if resp.status == 404:
            raise NotFound(f'file not found: {path}', status=404, url=url)
        raise ContentFetchError(f'Failed to fetch file: {resp.status}', status=resp.status, url=url)

    async def get_file(self, owner: str, repo: str, branch: str, path: str) -> str:
        url = self.url_for(owner, repo, branch, path)
        last: Optional[TransientError] = None
        for attempt in range(self._retries):
            try:
                return await self._fetch_once(url, path)
            except TransientError as exc:
                last = exc
                delay = self._backoff * (2 ** attempt)
                self._log.debug('retrying %s in %.2fs (status %s)', url, delay, exc.status)
                await self._sleep(delay)
        raise ContentFetchError(
            f'Failed to fetch file after {self._retries} retries',
            status=last.status if last else None,
            url=url,
        ) from last
