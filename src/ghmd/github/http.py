from __future__ import annotations

"""Async bridge over the synchronous HTTP transport.

Every remote call of the services goes through `HttpClient.get`, which runs
the blocking transport in a worker thread so the event loop only suspends at
the await around the network call.
"""

import asyncio
import json
import logging
from typing import Any, Mapping, Optional

from ghmd.core.errors import ServiceError
from ghmd.core.interfaces.net import HTTPTransportProtocol
from ghmd.core.models import FetchRequest, FetchResponse
from ghmd.logging.helpers import trace_io


class HttpClient:
    def __init__(
        self,
        transport: HTTPTransportProtocol,
        *,
        timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._http = transport
        self._timeout = timeout
        self._log = logger or logging.getLogger('ghmd.http')

    async def get(self, url: str, *, headers: Optional[Mapping[str, str]] = None) -> FetchResponse:
        req = FetchRequest(method='GET', url=url, headers=dict(headers or {}), timeout=self._timeout)
        trace_io(self._log, 'GET', url=url)
        resp = await asyncio.to_thread(self._http.request, req)
        trace_io(self._log, 'response', url=url, status=resp.status, size=len(resp.body))
        return resp


def decode_json(resp: FetchResponse) -> Any:
    """Decode a JSON body, mapping malformed payloads to ServiceError."""
    try:
        return json.loads(resp.body.decode('utf-8'))
    except (UnicodeDecodeError, ValueError) as exc:
        raise ServiceError(f'malformed JSON from {resp.final_url}: {exc}', status=resp.status, url=resp.final_url) from exc


def github_api_headers(token: Optional[str]) -> dict[str, str]:
    headers = {'Accept': 'application/vnd.github+json'}
    if token:
        headers['Authorization'] = f'Bearer {token}'
    return headers
