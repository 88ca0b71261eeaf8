"""Where: src/mbws/platform/musicbrainz/http_client.py
What: ``requests``-based transport for MusicBrainz WS2 GET requests.
Why: Decouple network concerns from query building and XML decoding.

One call performs exactly one request. Retries, caching and rate limiting
are left to callers.
"""

from __future__ import annotations

from collections.abc import Sequence

import requests

from mbws.config.settings import REQUEST_TIMEOUT
from mbws.features.ws2.domain.errors import TransportError
from mbws.features.ws2.usecases.ports import HTTPResponse
from mbws.platform.logging import logger

from .user_agent import resolve_user_agent


class MusicBrainzHTTPClient:
    """Perform blocking GET requests through a shared ``requests.Session``."""

    def __init__(
        self,
        user_agent: str | None = None,
        timeout: float | tuple[float, float] | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.user_agent: str = resolve_user_agent(user_agent)
        self.timeout: float | tuple[float, float] = timeout if timeout is not None else REQUEST_TIMEOUT
        self._session: requests.Session = session or requests.Session()

    def get(self, url: str, params: Sequence[tuple[str, str]]) -> HTTPResponse:
        headers = {
            "Accept": "application/xml",
            "User-Agent": self.user_agent,
        }
        try:
            response = self._session.get(
                url,
                params=list(params),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.debug("MusicBrainz request error for %s: %s", url, exc)
            raise TransportError(f"GET {url} failed", cause=exc) from exc

        response_headers = {str(key): str(value) for key, value in response.headers.items()}
        return HTTPResponse(
            status=int(response.status_code),
            body=response.content,
            headers=response_headers,
        )

    def close(self) -> None:
        self._session.close()


__all__ = ["MusicBrainzHTTPClient"]
