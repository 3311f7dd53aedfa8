from __future__ import annotations

"""Public surface for ghmd.core: data model, error taxonomy and protocols."""

from ghmd.core.errors import (
    ContentFetchError,
    FatalError,
    GhmdError,
    InvalidCleanPath,
    InvalidInput,
    InvalidReference,
    NetworkError,
    NotFound,
    RateLimited,
    RemoteError,
    ServiceError,
    TransientError,
)
from ghmd.core.models import (
    CleanPath,
    FetchRequest,
    FetchResponse,
    FileEntry,
    Reference,
    ResolvedReference,
    Submodule,
    SubmoduleFile,
    SubmoduleResult,
)

__all__ = [
    'CleanPath',
    'FetchRequest',
    'FetchResponse',
    'FileEntry',
    'Reference',
    'ResolvedReference',
    'Submodule',
    'SubmoduleFile',
    'SubmoduleResult',
    'GhmdError',
    'InvalidInput',
    'InvalidReference',
    'InvalidCleanPath',
    'RemoteError',
    'NotFound',
    'RateLimited',
    'TransientError',
    'FatalError',
    'ServiceError',
    'NetworkError',
    'ContentFetchError',
]
