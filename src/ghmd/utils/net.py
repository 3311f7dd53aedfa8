from __future__ import annotations

import os
import ssl
from typing import Optional
from urllib.parse import quote

from ghmd import __version__

DEFAULT_UA: str = f'ghmd/{__version__} (+https://github.com)'


def ssl_context_for(url: str) -> Optional[ssl.SSLContext]:
    """Return a permissive SSL context when GHMD_INSECURE_TLS=1 and the URL is HTTPS."""
    if not url.lower().startswith('https'):
        return None
    if os.getenv('GHMD_INSECURE_TLS') == '1':
        ctx = ssl.create_default_context()
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
        return ctx
    return None


def quote_segment(value: str) -> str:
    """Percent-encode one URL path segment (slashes included)."""
    return quote(value, safe='')


def quote_path(path: str) -> str:
    """Percent-encode each '/'-separated segment of *path*, keeping the separators."""
    return '/'.join(quote_segment(part) for part in path.split('/'))
