"""Connection management.

Owns the authenticated session that commands borrow for one invocation.
Token acquisition itself happens outside collabkit; we only carry the token.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator

import httpx

from adapters.graph_client import GraphClient
from adapters.http_client import build_client
from core.config import AppSettings
from core.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Authenticated session: settings plus a ready-to-use remote client."""

    settings: AppSettings
    client: GraphClient

    @property
    def site_id(self) -> str:
        return self.settings.site_id


@contextmanager
def open_session(
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
    sleep: Callable[[float], None] | None = None,
) -> Iterator[Session]:
    """Open a session and close its HTTP client on exit."""

    settings = settings or AppSettings()
    if not settings.access_token:
        raise ConfigurationError(
            "No access token configured. Set COLLABKIT_ACCESS_TOKEN or run `collabkit doctor setup-auth`."
        )

    http = build_client(settings, transport=transport)
    client = GraphClient(http, settings) if sleep is None else GraphClient(http, settings, sleep=sleep)
    logger.debug("Opened session against %s (site=%s)", settings.graph_base_url, settings.site_id)
    try:
        yield Session(settings=settings, client=client)
    finally:
        http.close()
