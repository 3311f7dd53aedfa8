from __future__ import annotations
from typing import Protocol, Sequence, runtime_checkable

from ghmd.core.models import FetchRequest, FetchResponse, FileEntry


@runtime_checkable
class HTTPTransportProtocol(Protocol):
    def request(self, req: FetchRequest) -> FetchResponse:
        ...


@runtime_checkable
class ListingServiceProtocol(Protocol):
    """Lists every blob of a repository at a branch.

    Raises NotFound for an unknown branch, RateLimited on quota exhaustion
    and ServiceError otherwise.
    """

    async def list_files(self, owner: str, repo: str, branch: str) -> Sequence[FileEntry]:
        ...


@runtime_checkable
class ContentServiceProtocol(Protocol):
    """Fetches raw file text. Raises NotFound or a FatalError subclass."""

    async def get_file(self, owner: str, repo: str, branch: str, path: str) -> str:
        ...


@runtime_checkable
class MetadataServiceProtocol(Protocol):
    """Resolves the default branch; never raises, falls back to 'main'."""

    async def get_default_branch(self, owner: str, repo: str) -> str:
        ...
