"""Resolve the app links and custom-scheme URLs the platform routes to the client."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from urllib.parse import parse_qs, urlsplit

from .config import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeepLink:
    path: str
    params: dict[str, str] = field(default_factory=dict)


def parse_deep_link(url: str, *, settings: Settings | None = None) -> DeepLink | None:
    """Return the in-app route for ``url``, or ``None`` if it is not one of ours.

    ``https://onlyus.app/invite?code=1`` and ``onlyus://invite?code=1`` both
    resolve to ``DeepLink("/invite", {"code": "1"})``.
    """

    cfg = settings or get_settings()
    raw = (url or "").strip()
    if not raw:
        return None
    parts = urlsplit(raw)
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()

    if scheme in ("https", "http") and host in (cfg.deep_link_host, f"www.{cfg.deep_link_host}"):
        path = parts.path or "/"
    elif scheme == cfg.deep_link_scheme.lower():
        # onlyus://invite/abc parses "invite" as the host
        path = "/" + "/".join(segment for segment in (parts.netloc, parts.path.strip("/")) if segment)
    else:
        logger.debug("Ignoring foreign link %s", raw)
        return None

    path = "/" + path.strip("/") if path.strip("/") else "/"
    params = {key: values[-1] for key, values in parse_qs(parts.query).items() if values}
    return DeepLink(path=path, params=params)


__all__ = ["DeepLink", "parse_deep_link"]
