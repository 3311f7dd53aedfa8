from .net import (
    ContentServiceProtocol,
    HTTPTransportProtocol,
    ListingServiceProtocol,
    MetadataServiceProtocol,
)

__all__ = [
    'HTTPTransportProtocol',
    'ListingServiceProtocol',
    'ContentServiceProtocol',
    'MetadataServiceProtocol',
]
