"""
HTTP client utilities for storjsync
"""

from typing import Dict, Optional

import httpx


class HttpClient:
    """
    Thin wrapper around httpx.AsyncClient.

    Every request is a single attempt; transport errors propagate to the caller.
    """

    def __init__(
        self,
        timeout: float = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=20)
        )

    async def get(self, url: str, headers: Optional[Dict[str, str]] = None) -> httpx.Response:
        """Make a GET request."""
        return await self._request("GET", url, headers=headers)

    async def head(self, url: str, headers: Optional[Dict[str, str]] = None) -> httpx.Response:
        """Make a HEAD request."""
        return await self._request("HEAD", url, headers=headers)

    async def _request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        return await self._client.request(method, url, headers=headers)

    async def close(self):
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
