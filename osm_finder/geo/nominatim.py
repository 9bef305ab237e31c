"""
Nominatim API Integration

Resolves free-text place names to coordinates and serves autocomplete
candidates from the OpenStreetMap Nominatim API.
"""

import logging
from contextlib import nullcontext
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from ..config_manager import FinderConfig
from ..exceptions import InvalidInputError, PlaceNotFoundError, UpstreamError
from .coordinate import Coordinate, parse_coordinate

logger = logging.getLogger(__name__)

SERVICE_NAME = "Nominatim"


@dataclass
class PlaceCandidate:
    """One ranked geocoding candidate, as shown in a suggestion list."""
    display_name: str
    coordinate: Coordinate
    place_type: Optional[str] = None  # e.g., "city", "suburb"
    osm_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "display_name": self.display_name,
            "latitude": self.coordinate.latitude,
            "longitude": self.coordinate.longitude,
            "place_type": self.place_type,
            "osm_id": self.osm_id,
        }


class NominatimClient:
    """
    Geocoding client for the Nominatim /search endpoint.

    Args:
        config: FinderConfig with endpoint, user agent, timeout and proxy
        client: Optional shared httpx.Client. When omitted, a short-lived
                client is opened for each request.
    """

    def __init__(self, config: Optional[FinderConfig] = None, client: Optional[httpx.Client] = None):
        self.config = config or FinderConfig()
        self._client = client

    @property
    def headers(self) -> Dict[str, str]:
        return {"User-Agent": self.config.user_agent}

    def _open_client(self):
        if self._client is not None:
            return nullcontext(self._client)
        return httpx.Client(timeout=self.config.geocode_timeout, proxy=self.config.proxy_url)

    def _search(self, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Run one /search request and return the decoded candidate list."""
        try:
            with self._open_client() as client:
                response = client.get(
                    self.config.search_url,
                    params=params,
                    headers=self.headers,
                    timeout=self.config.geocode_timeout,
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise UpstreamError(SERVICE_NAME, e.response.reason_phrase or "request failed",
                                status_code=e.response.status_code) from e
        except httpx.TimeoutException as e:
            raise UpstreamError(SERVICE_NAME, "request timed out") from e
        except httpx.HTTPError as e:
            raise UpstreamError(SERVICE_NAME, str(e) or type(e).__name__) from e
        except ValueError as e:
            raise UpstreamError(SERVICE_NAME, "response is not valid JSON") from e

        if not isinstance(data, list):
            raise UpstreamError(SERVICE_NAME, f"expected a list of places, got {type(data).__name__}")
        return data

    def resolve_one(self, place_text: str) -> Coordinate:
        """
        Resolve a place name to the coordinate of its highest-ranked candidate.

        Args:
            place_text: Free-text place (e.g., "Jakarta", "Hermannstraße 100, Berlin")

        Returns:
            Coordinate of the first candidate

        Raises:
            InvalidInputError: if place_text is empty
            PlaceNotFoundError: if Nominatim returns no candidates
            UpstreamError: on network failure, error status or malformed response
        """
        query = (place_text or "").strip()
        if not query:
            raise InvalidInputError("Place name must not be empty")

        params = {
            "q": query,
            "format": "json",
            "limit": 1,
        }
        data = self._search(params)
        if not data:
            raise PlaceNotFoundError(query)

        first = data[0]
        coordinate = None
        if isinstance(first, dict):
            coordinate = parse_coordinate(first.get("lat"), first.get("lon"))
        if coordinate is None:
            raise UpstreamError(SERVICE_NAME, f"candidate for '{query}' has no usable coordinates")

        logger.debug("Resolved %r to %s,%s", query, coordinate.latitude, coordinate.longitude)
        return coordinate

    def suggest(self, partial_text: str) -> List[PlaceCandidate]:
        """
        Autocomplete candidates for partially typed input.

        Never raises: short input, upstream failures and malformed entries all
        degrade to fewer (or no) suggestions so typing is never interrupted.
        """
        query = (partial_text or "").strip()
        if len(query) < self.config.suggest_min_chars:
            return []

        params = {
            "q": query,
            "format": "json",
            "limit": self.config.suggest_limit,
            "addressdetails": 1,
        }
        try:
            data = self._search(params)
        except UpstreamError as e:
            logger.debug("Suggestions unavailable for %r: %s", query, e)
            return []

        candidates = []
        for result in data[:self.config.suggest_limit]:
            if not isinstance(result, dict):
                continue
            coordinate = parse_coordinate(result.get("lat"), result.get("lon"))
            if coordinate is None:
                continue
            osm_id = result.get("osm_id")
            candidates.append(PlaceCandidate(
                display_name=result.get("display_name") or result.get("name") or query,
                coordinate=coordinate,
                place_type=result.get("type") or None,
                osm_id=str(osm_id) if osm_id is not None else None,
            ))
        return candidates
