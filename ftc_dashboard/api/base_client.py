from typing import Any, Dict, Optional

import httpx
from loguru import logger

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "ftc-dashboard/0.1 (+https://ftcscout.org)",
}


class ApiError(Exception):
    """Base exception for errors talking to the statistics API."""

    pass


class FetchError(ApiError):
    """Raised for a non-2xx response, a transport failure or a malformed body."""

    def __init__(
        self, message: str, url: Optional[str] = None, status_code: Optional[int] = None
    ):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class NotFoundError(ApiError):
    """Raised when the API answers successfully but has no data for the lookup."""

    pass


class BaseApiClient:
    """Thin async JSON-over-HTTP client. One attempt per request, no retries."""

    source_name: str = "API"

    def __init__(
        self, client: Optional[httpx.AsyncClient] = None, timeout: float = 30.0
    ):
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            headers=DEFAULT_HEADERS,
        )

    async def _make_request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """Makes a single asynchronous HTTP request and checks its status."""
        logger.debug(f"Making request: {method} {url}", params=params)
        try:
            response = await self.client.request(
                method, url, headers=headers, params=params
            )
        except httpx.RequestError as e:
            # Network errors, timeouts etc.
            logger.warning(f"Request error for {self.source_name} at {url}: {e}")
            raise FetchError(f"Request to {url} failed: {e}", url=url) from e

        if not response.is_success:
            logger.error(
                f"HTTP error during request for {self.source_name}: {response.status_code} at {url}"
            )
            raise FetchError(
                f"HTTP error: {response.status_code}",
                url=url,
                status_code=response.status_code,
            )

        logger.debug(f"Request successful: {response.status_code} for {url}")
        return response

    async def _get_json(self, url: str) -> Any:
        """GETs ``url`` and parses the body as JSON."""
        response = await self._make_request("GET", url)
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Error parsing {self.source_name} JSON from {url}: {e}")
            logger.debug(f"Raw response content: {response.text[:500]}")
            raise FetchError(f"Malformed JSON body from {url}", url=url) from e

    async def close(self):
        """Closes the underlying HTTP client."""
        await self.client.aclose()
        logger.info(f"Closed HTTP client for {self.source_name}")
