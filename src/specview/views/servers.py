"""Resolve server URLs against the document's own URL.

Servers may be declared at three levels. The most specific non-``None``
list wins outright; lists are never merged::

    operation.servers  >  path_item.servers  >  document.servers

Relative URLs (``/v2``, ``api``) are joined against the directory the
document was published in, and protocol-relative ones (``//host/v1``) take
the document's scheme. Absolute URLs, including templated ones such as
``{scheme}://api.example.com``, pass through untouched. ``{variable}``
placeholders are never substituted here.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional
from urllib.parse import urldefrag, urljoin

from specview.models import NormalizedServer

logger = logging.getLogger(__name__)

# A scheme prefix, or a templated scheme such as "{scheme}://".
_ABSOLUTE_URL = re.compile(r"^[a-z][a-z0-9+.-]*:|^\{", re.IGNORECASE)


def select_servers(*candidates: Optional[list[Any]]) -> list[Any]:
    """Return the first candidate list that is not ``None``.

    Pass candidates from most to least specific. An explicit empty list is
    a valid choice and stops the search.
    """
    for servers in candidates:
        if servers is not None:
            return servers
    return []


def base_url(spec_url: Optional[str]) -> Optional[str]:
    """Return the directory URL of *spec_url* without query or fragment."""
    if not spec_url:
        return None
    url, _ = urldefrag(spec_url)
    url = url.split("?", 1)[0]
    return urljoin(url, ".")


def resolve_url(base: Optional[str], url: str) -> str:
    """Resolve *url* against *base*, leaving absolute URLs unchanged."""
    if base is None or _ABSOLUTE_URL.match(url):
        return url
    return urljoin(base, url)


def normalize_servers(
    spec_url: Optional[str], servers: Optional[list[Any]]
) -> list[NormalizedServer]:
    """Resolve every server URL in *servers* to an absolute form.

    Args:
        spec_url: Absolute URL of the document, or ``None`` when unknown
            (relative URLs are then returned unchanged).
        servers: Raw *Server Objects*. An empty or missing list is treated
            as a single server at ``/``.

    Returns:
        One :class:`~specview.models.NormalizedServer` per usable entry, in
        declaration order.
    """
    base = base_url(spec_url)
    if not servers:
        servers = [{"url": "/"}]

    normalized: list[NormalizedServer] = []
    for server in servers:
        if not isinstance(server, dict):
            logger.debug("Skipping malformed server entry: %r", server)
            continue
        normalized.append(
            NormalizedServer(
                url=resolve_url(base, str(server.get("url") or "/")),
                description=server.get("description") or "",
                variables=server.get("variables") or {},
            )
        )
    return normalized
