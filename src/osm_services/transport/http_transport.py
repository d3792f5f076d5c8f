"""
HTTP transport built on httpx.

The owning ConfigStore is consulted on every request, so changes to the
``adapter``, ``User-Agent``, ``user``/``password`` and ``verbose`` settings
apply to the next request without rebuilding the transport.
"""

import time
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

import httpx

from osm_services.constants import DEFAULT_HTTP_TIMEOUT
from osm_services.errors import TransportError
from osm_services.logging import LogConfig, get_logger, log_api_call
from osm_services.transport.base import Response, Transport

if TYPE_CHECKING:
    from osm_services.utils.config_store import ConfigStore


# adapter name -> factory for the httpx transport that performs the I/O
ADAPTERS: Dict[str, Callable[[], httpx.BaseTransport]] = {
    "httpx": httpx.HTTPTransport,
}


class HttpTransport(Transport):
    def __init__(self, config: "ConfigStore", timeout: float = DEFAULT_HTTP_TIMEOUT):
        self.config = config
        self.timeout = timeout
        self.logger = get_logger("osm_services.transport.http")
        # client wrapping a caller-supplied adapter, reused across requests
        self._shared_client: Optional[httpx.Client] = None
        self._shared_adapter: Optional[httpx.BaseTransport] = None

    def _resolve_adapter(self) -> Tuple[httpx.BaseTransport, bool]:
        """Return the httpx transport to use and whether this request owns it."""
        adapter = self.config.get_value("adapter")
        if isinstance(adapter, httpx.BaseTransport):
            return adapter, False
        try:
            factory = ADAPTERS[adapter]
        except (KeyError, TypeError):
            raise TransportError(f"Unknown adapter '{adapter}'") from None
        return factory(), True

    def _client_for(self, adapter: httpx.BaseTransport, owns_adapter: bool) -> httpx.Client:
        if owns_adapter:
            return httpx.Client(transport=adapter, timeout=self.timeout)
        if self._shared_client is None or self._shared_adapter is not adapter:
            self._shared_client = httpx.Client(transport=adapter, timeout=self.timeout)
            self._shared_adapter = adapter
        return self._shared_client

    def _auth(self) -> Optional[httpx.BasicAuth]:
        user = self.config.get_value("user")
        password = self.config.get_value("password")
        if user and password is not None:
            return httpx.BasicAuth(user, password)
        return None

    def _headers(self) -> Dict[str, str]:
        user_agent = self.config.get_value("User-Agent")
        return {"User-Agent": user_agent} if user_agent else {}

    def close(self) -> None:
        """
        Close the client kept for a caller-supplied adapter.

        httpx closes the adapter along with its client, so call this once
        the adapter is no longer needed.
        """
        if self._shared_client is not None:
            self._shared_client.close()
            self._shared_client = None
            self._shared_adapter = None

    def get_response(self, url: str) -> Response:
        adapter, owns_adapter = self._resolve_adapter()
        client = self._client_for(adapter, owns_adapter)
        start = time.monotonic()
        try:
            resp = client.get(url, headers=self._headers(), auth=self._auth())
        except httpx.HTTPError as e:
            log_api_call("GET", url, duration=time.monotonic() - start, error=str(e))
            raise TransportError(f"Request failed: {e}", url=url) from e
        finally:
            if owns_adapter:
                client.close()

        duration = time.monotonic() - start
        log_api_call(
            "GET",
            url,
            status_code=resp.status_code,
            duration=duration,
            response_size=len(resp.content),
        )

        if self.config.get_value("verbose"):
            limit = LogConfig().max_payload_size
            self.logger.info(f"Response body from {url}: {resp.text[:limit]}")

        if not resp.is_success:
            raise TransportError(
                f"Unexpected HTTP status {resp.status_code}",
                url=url,
                status_code=resp.status_code,
            )

        return Response(
            status_code=resp.status_code,
            body=resp.text,
            headers=dict(resp.headers),
        )
