"""
Search Pipeline

Main orchestration module: place name -> coordinate -> Overpass query ->
raw elements -> business records. Stages run strictly in sequence and
nothing is retried; a failure ends the current search.
"""

import logging
import time
from typing import Iterable, Optional

from ..config_manager import FinderConfig
from ..exceptions import InvalidInputError
from ..geo.nominatim import NominatimClient
from ..models import SearchResult
from ..parsers.business import map_elements
from .overpass import OverpassClient
from .query import FilterLike, build_query, normalize_radius, parse_filters, unmapped_filters

logger = logging.getLogger(__name__)


class SearchPipeline:
    """
    Composition root for one search.

    Args:
        geocoder: Object with resolve_one(place_text) -> Coordinate
        poi_client: Object with fetch(query_text) -> List[RawElement]
        config: FinderConfig (used for the default radius and query timeout)
    """

    def __init__(
        self,
        geocoder: Optional[NominatimClient] = None,
        poi_client: Optional[OverpassClient] = None,
        config: Optional[FinderConfig] = None,
    ):
        self.config = config or FinderConfig()
        self.geocoder = geocoder or NominatimClient(self.config)
        self.poi_client = poi_client or OverpassClient(self.config)

    def search(
        self,
        place_text: str,
        radius_meters: Optional[float] = None,
        filters: Optional[Iterable[FilterLike]] = None,
        verbose: Optional[bool] = None,
    ) -> SearchResult:
        """
        Find named businesses around a place.

        Args:
            place_text: Place to search around (e.g., "Jakarta")
            radius_meters: Search radius in metres (default from config)
            filters: Category filters (CategoryFilter or names); None/empty for the default set
            verbose: Print progress (default from config)

        Returns:
            SearchResult; an empty one when no named POI is in range

        Raises:
            InvalidInputError: empty place, bad radius or unknown category (no request is made)
            PlaceNotFoundError: geocoding found nothing
            UpstreamError: Nominatim or Overpass failed
        """
        verbose = self.config.verbose if verbose is None else verbose
        start_time = time.time()

        place = (place_text or "").strip()
        if not place:
            raise InvalidInputError("Enter a place to search")
        if radius_meters is None:
            radius_meters = self.config.default_radius
        radius = normalize_radius(radius_meters)
        selected = parse_filters(filters)

        if verbose:
            print("=" * 70)
            print(f"SEARCHING: businesses within {radius}m of {place}")
            print("=" * 70)
            if selected:
                print(f"  Categories: {', '.join(f.value for f in selected)}")
                skipped = unmapped_filters(selected)
                if skipped:
                    print(f"  No query clause for: {', '.join(f.value for f in skipped)}")

        # Step 1: geocode
        if verbose:
            print(f"\nResolving '{place}'...")
        center = self.geocoder.resolve_one(place)
        logger.info("Resolved %r to %s,%s", place, center.latitude, center.longitude)
        if verbose:
            print(f"  [OK] {center.latitude:.6f}, {center.longitude:.6f}")

        # Step 2: query
        query = build_query(center, radius, selected, timeout=self.config.query_timeout)
        logger.debug("Overpass query:\n%s", query)

        # Step 3: fetch
        if verbose:
            print("\nQuerying Overpass...")
        elements = self.poi_client.fetch(query)
        if verbose:
            print(f"  [OK] {len(elements)} elements returned")

        # Step 4: map
        businesses = map_elements(elements)
        dropped = len(elements) - len(businesses)
        logger.info("Mapped %d businesses (%d elements without name or position)",
                    len(businesses), dropped)

        if verbose:
            elapsed = time.time() - start_time
            print(f"\n  Businesses: {len(businesses)}")
            print(f"  Skipped (unnamed or unplaced): {dropped}")
            print(f"  Time: {elapsed:.1f}s")

        return SearchResult(
            place=place,
            center=center,
            radius_meters=radius,
            filters=selected,
            businesses=businesses,
        )
