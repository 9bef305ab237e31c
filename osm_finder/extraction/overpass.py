"""
Overpass Execution

Submits Overpass QL queries to the map-data interpreter and returns the raw
elements of the response.
"""

import logging
from contextlib import nullcontext
from typing import List, Optional

import httpx

from ..config_manager import FinderConfig
from ..exceptions import UpstreamError
from ..models import RawElement

logger = logging.getLogger(__name__)

SERVICE_NAME = "Overpass"


class OverpassClient:
    """
    Client for the Overpass API interpreter endpoint.

    Args:
        config: FinderConfig with endpoint, user agent, timeout and proxy
        client: Optional shared httpx.Client. When omitted, a short-lived
                client is opened for each request.
    """

    def __init__(self, config: Optional[FinderConfig] = None, client: Optional[httpx.Client] = None):
        self.config = config or FinderConfig()
        self._client = client

    def _open_client(self):
        if self._client is not None:
            return nullcontext(self._client)
        return httpx.Client(timeout=self.config.overpass_timeout, proxy=self.config.proxy_url)

    def fetch(self, query_text: str) -> List[RawElement]:
        """
        Execute a query and return its elements.

        Args:
            query_text: Overpass QL query, sent verbatim as the request body

        Returns:
            List of RawElement in response order

        Raises:
            UpstreamError: on timeout, network failure, error status (Overpass
                answers malformed queries with 400) or a malformed response body
        """
        headers = {
            "Content-Type": "text/plain",
            "User-Agent": self.config.user_agent,
        }

        try:
            with self._open_client() as client:
                response = client.post(
                    self.config.overpass_url,
                    content=query_text.encode("utf-8"),
                    headers=headers,
                    timeout=self.config.overpass_timeout,
                )
                if response.status_code != 200:
                    raise UpstreamError(
                        SERVICE_NAME,
                        response.text[:200].strip() or response.reason_phrase or "request failed",
                        status_code=response.status_code,
                    )
                data = response.json()
        except httpx.TimeoutException as e:
            raise UpstreamError(SERVICE_NAME, "request timed out") from e
        except httpx.HTTPError as e:
            raise UpstreamError(SERVICE_NAME, str(e) or type(e).__name__) from e
        except ValueError as e:
            raise UpstreamError(SERVICE_NAME, "response is not valid JSON") from e

        elements = data.get("elements") if isinstance(data, dict) else None
        if not isinstance(elements, list):
            raise UpstreamError(SERVICE_NAME, "response has no 'elements' list")

        if isinstance(data, dict) and data.get("remark"):
            # Overpass reports runtime errors (e.g., query timeout) as a remark on a 200
            logger.warning("Overpass remark: %s", data["remark"])

        result = [RawElement.from_json(e) for e in elements if isinstance(e, dict)]
        logger.debug("Overpass returned %d elements", len(result))
        return result
