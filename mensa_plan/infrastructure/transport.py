"""
Async HTTP transport for the meal plan API.
"""
import logging
from typing import Dict, Optional

import httpx

from mensa_plan.infrastructure.adapters.errors import RequestFailed, UnexpectedStatus
from mensa_plan.infrastructure.logging.mensa_logger import redact_url

logger = logging.getLogger(__name__)


class HttpTransport:
    """Single-shot GET without retries; connection handling is left to httpx."""

    DEFAULT_HEADERS = {
        "User-Agent": "mensa-plan/0.1 (+https://www.swfr.de)",
        "Accept": "application/xml,text/xml;q=0.9,*/*;q=0.8",
    }

    def __init__(
        self,
        timeout: float = 30.0,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the transport.

        Args:
            timeout: Request timeout in seconds
            headers: Extra headers merged over DEFAULT_HEADERS
            transport: Custom httpx transport (e.g. httpx.MockTransport)
        """
        self.timeout = timeout
        self.headers = {**self.DEFAULT_HEADERS, **(headers or {})}
        self._transport = transport

    async def get(self, url: str) -> str:
        """
        Fetch the body of url.

        Returns:
            Response body as text

        Raises:
            RequestFailed: If the request could not complete
            UnexpectedStatus: If the response status is not 200
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(url, headers=self.headers)
        except httpx.TimeoutException as e:
            raise RequestFailed(f"Timeout after {self.timeout}s: {e}", url) from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise RequestFailed(f"Request failed: {e}", url) from e

        if response.status_code != httpx.codes.OK:
            logger.warning(f"HTTP {response.status_code} for {redact_url(url)}")
            raise UnexpectedStatus(response.status_code, response.text)

        logger.debug(f"Fetched {redact_url(url)} ({len(response.text)} chars)")
        return response.text
