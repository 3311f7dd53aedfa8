from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ghmd.aggregator import Aggregator
from ghmd.core.interfaces.net import (
    ContentServiceProtocol,
    HTTPTransportProtocol,
    ListingServiceProtocol,
    MetadataServiceProtocol,
)
from ghmd.github.content import RawContentService
from ghmd.github.listing import FallbackListingService, GitHubTreeListingBackend, UnghListingBackend
from ghmd.github.metadata import GitHubMetadataService
from ghmd.logging.helpers import get_logger
from ghmd.net.urllib_transport import UrllibHTTPTransport
from ghmd.runtime.config import GhmdConfig
from ghmd.utils.net import ssl_context_for


@dataclass(frozen=True)
class Services:
    listing: ListingServiceProtocol
    content: ContentServiceProtocol
    metadata: MetadataServiceProtocol


def build_transport(cfg: GhmdConfig) -> HTTPTransportProtocol:
    return UrllibHTTPTransport(
        user_agent=cfg.user_agent,
        ssl_ctx_provider=ssl_context_for,
        default_timeout=cfg.timeout,
    )


def build_services(
    cfg: GhmdConfig,
    *,
    transport: Optional[HTTPTransportProtocol] = None,
    logger: Optional[logging.Logger] = None,
) -> Services:
    """Wire the listing (with API fallback), content and metadata services."""
    http = transport or build_transport(cfg)
    listing = FallbackListingService(
        UnghListingBackend(http, base_url=cfg.ungh_base, timeout=cfg.timeout),
        GitHubTreeListingBackend(http, base_url=cfg.github_api_base, token=cfg.github_token, timeout=cfg.timeout),
        logger=logger or get_logger('listing'),
    )
    content = RawContentService(
        http,
        base_url=cfg.raw_base,
        retries=cfg.retries,
        backoff_base=cfg.backoff_base,
        timeout=cfg.timeout,
    )
    metadata = GitHubMetadataService(http, base_url=cfg.github_api_base, token=cfg.github_token, timeout=cfg.timeout)
    return Services(listing=listing, content=content, metadata=metadata)


def build_aggregator(
    cfg: GhmdConfig,
    *,
    transport: Optional[HTTPTransportProtocol] = None,
    services: Optional[Services] = None,
    logger: Optional[logging.Logger] = None,
) -> Aggregator:
    svc = services or build_services(cfg, transport=transport, logger=logger)
    return Aggregator(
        svc.listing,
        svc.content,
        svc.metadata,
        concurrency=cfg.concurrency,
        max_submodule_depth=cfg.max_submodule_depth,
        submodule_file_cap=cfg.submodule_file_cap,
        logger=logger,
    )
