from ghmd.github.content import RawContentService
from ghmd.github.listing import FallbackListingService, GitHubTreeListingBackend, UnghListingBackend
from ghmd.github.metadata import GitHubMetadataService

__all__ = [
    'RawContentService',
    'FallbackListingService',
    'GitHubTreeListingBackend',
    'UnghListingBackend',
    'GitHubMetadataService',
]
