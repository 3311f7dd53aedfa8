from __future__ import annotations

"""Runtime configuration.

Every tunable of the aggregation core lives in `GhmdConfig`. Values come from
defaults, then `GHMD_*` environment variables (`from_env`), then explicit
overrides such as CLI flags (`with_overrides`).
"""

import dataclasses
import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, TypeVar

from ghmd.constants import (
    DEFAULT_BACKOFF_BASE,
    DEFAULT_CONCURRENCY,
    DEFAULT_MAX_SUBMODULE_DEPTH,
    DEFAULT_RETRIES,
    DEFAULT_SUBMODULE_FILE_CAP,
    DEFAULT_TIMEOUT,
    GITHUB_API_BASE,
    RAW_GITHUB_BASE,
    UNGH_BASE,
)
from ghmd.utils.net import DEFAULT_UA

logger = logging.getLogger('ghmd.config')

N = TypeVar('N', int, float)


@dataclass(frozen=True)
class GhmdConfig:
    """Immutable configuration blob used to wire services and the Aggregator."""
    concurrency: int = DEFAULT_CONCURRENCY
    max_submodule_depth: int = DEFAULT_MAX_SUBMODULE_DEPTH
    submodule_file_cap: int = DEFAULT_SUBMODULE_FILE_CAP
    retries: int = DEFAULT_RETRIES
    backoff_base: float = DEFAULT_BACKOFF_BASE
    timeout: float = DEFAULT_TIMEOUT
    github_token: Optional[str] = None
    user_agent: str = DEFAULT_UA
    ungh_base: str = UNGH_BASE
    github_api_base: str = GITHUB_API_BASE
    raw_base: str = RAW_GITHUB_BASE

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'GhmdConfig':
        env = os.environ if env is None else env
        d = cls()

        def _num(name: str, cast: Callable[[str], N], default: N, minimum: N) -> N:
            raw = (env.get(name) or '').strip()
            if not raw:
                return default
            try:
                value = cast(raw)
            except ValueError:
                logger.warning('⚠  ignoring malformed %s=%r; using %r', name, raw, default)
                return default
            if value < minimum:
                logger.warning('⚠  ignoring out-of-range %s=%r; using %r', name, raw, default)
                return default
            return value

        token = (env.get('GHMD_GITHUB_TOKEN') or env.get('GITHUB_TOKEN') or '').strip() or None
        return cls(
            concurrency=_num('GHMD_CONCURRENCY', int, d.concurrency, 1),
            max_submodule_depth=_num('GHMD_MAX_DEPTH', int, d.max_submodule_depth, 0),
            submodule_file_cap=_num('GHMD_SUBMODULE_FILE_CAP', int, d.submodule_file_cap, 0),
            retries=_num('GHMD_RETRIES', int, d.retries, 1),
            backoff_base=_num('GHMD_BACKOFF_BASE', float, d.backoff_base, 0.0),
            timeout=_num('GHMD_TIMEOUT', float, d.timeout, 0.1),
            github_token=token,
            user_agent=(env.get('GHMD_USER_AGENT') or '').strip() or d.user_agent,
            ungh_base=(env.get('GHMD_UNGH_BASE') or '').strip() or d.ungh_base,
            github_api_base=(env.get('GHMD_GITHUB_API_BASE') or '').strip() or d.github_api_base,
            raw_base=(env.get('GHMD_RAW_BASE') or '').strip() or d.raw_base,
        )

    def with_overrides(self, **overrides: Any) -> 'GhmdConfig':
        """Return a copy with every non-None override applied."""
        return dataclasses.replace(self, **{k: v for k, v in overrides.items() if v is not None})
