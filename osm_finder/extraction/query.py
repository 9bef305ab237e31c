"""
Overpass Query Construction

Builds Overpass QL text that selects named business nodes within a radius of
a centre point, either for a default set of business tags or for a user's
category selection.
"""

import logging
import math
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple, Union

from ..config import OVERPASS_QUERY_TIMEOUT
from ..exceptions import InvalidInputError
from ..geo.coordinate import Coordinate

logger = logging.getLogger(__name__)


class CategoryFilter(str, Enum):
    """Categories a search can be restricted to. Declaration order is query order."""
    SHOP = "shop"
    RESTAURANT = "restaurant"
    CAFE = "cafe"
    BAR = "bar"
    HOTEL = "hotel"
    PHARMACY = "pharmacy"
    BANK = "bank"
    CLINIC = "clinic"
    HOSPITAL = "hospital"
    DENTIST = "dentist"
    CAR_RENTAL = "car_rental"
    SUPERMARKET = "supermarket"
    MALL = "mall"
    OFFICE = "office"
    SCHOOL = "school"
    UNIVERSITY = "university"


DEFAULT_AMENITIES = (
    "restaurant", "cafe", "bar", "pub", "fast_food", "food_court",
    "pharmacy", "bank", "clinic", "hospital", "dentist", "doctors",
    "veterinary", "atm", "marketplace", "car_rental", "car_repair",
    "car_wash", "fuel", "parking", "hotel", "motel", "guest_house",
    "hostel", "hairdresser", "beauty_salon", "laundry", "dry_cleaning",
)

OFFICE_SELECTOR = '["office"~"^(company|business)$"]'

# Tag selectors for an unfiltered search
DEFAULT_SELECTORS = (
    '["shop"]',
    '["amenity"~"^(' + "|".join(DEFAULT_AMENITIES) + ')$"]',
    OFFICE_SELECTOR,
    '["craft"]',
)


def _amenity(value: str) -> str:
    return f'["amenity"="{value}"]'


# Category -> tag selector. Categories missing here produce no clause.
FILTER_CLAUSES: Dict[CategoryFilter, str] = {
    CategoryFilter.SHOP: '["shop"]',
    CategoryFilter.RESTAURANT: _amenity("restaurant"),
    CategoryFilter.CAFE: _amenity("cafe"),
    CategoryFilter.BAR: _amenity("bar"),
    CategoryFilter.HOTEL: _amenity("hotel"),
    CategoryFilter.PHARMACY: _amenity("pharmacy"),
    CategoryFilter.BANK: _amenity("bank"),
    CategoryFilter.CLINIC: _amenity("clinic"),
    CategoryFilter.HOSPITAL: _amenity("hospital"),
    CategoryFilter.DENTIST: _amenity("dentist"),
    CategoryFilter.CAR_RENTAL: _amenity("car_rental"),
    CategoryFilter.SUPERMARKET: '["shop"="supermarket"]',
    CategoryFilter.MALL: '["building"="mall"]',
    CategoryFilter.OFFICE: OFFICE_SELECTOR,
}


FilterLike = Union[CategoryFilter, str]


def parse_filter(value: FilterLike) -> CategoryFilter:
    """Convert a filter name (case-insensitive, '-' or ' ' allowed for '_') to a CategoryFilter."""
    if isinstance(value, CategoryFilter):
        return value
    key = str(value).strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return CategoryFilter(key)
    except ValueError:
        choices = ", ".join(f.value for f in CategoryFilter)
        raise InvalidInputError(f"Unknown category '{value}'. Choose from: {choices}") from None


def parse_filters(values: Optional[Iterable[FilterLike]]) -> Tuple[CategoryFilter, ...]:
    """Parse and deduplicate filters, returning them in declaration order."""
    if not values:
        return ()
    if isinstance(values, (str, CategoryFilter)):
        values = [values]
    selected = {parse_filter(v) for v in values}
    return tuple(f for f in CategoryFilter if f in selected)


def unmapped_filters(filters: Iterable[FilterLike]) -> List[CategoryFilter]:
    """Selected filters that have no clause and are skipped by build_query()."""
    return [f for f in parse_filters(filters) if f not in FILTER_CLAUSES]


def normalize_radius(radius_meters: float) -> int:
    """Validate a radius and round it to whole metres."""
    if isinstance(radius_meters, bool) or not isinstance(radius_meters, (int, float)):
        raise InvalidInputError(f"Radius must be a number of metres, got {radius_meters!r}")
    if not math.isfinite(radius_meters) or radius_meters <= 0:
        raise InvalidInputError(f"Radius must be greater than 0, got {radius_meters!r}")
    radius = int(round(radius_meters))
    if radius < 1:
        raise InvalidInputError(f"Radius must be at least 1 metre, got {radius_meters!r}")
    return radius


def build_clause(selector: str, center: Coordinate, radius: int) -> str:
    """One node clause scoped to a disk around center."""
    return f"node{selector}(around:{radius},{center.latitude!r},{center.longitude!r});"


def build_clauses(
    center: Coordinate,
    radius_meters: float,
    filters: Optional[Iterable[FilterLike]] = None,
) -> List[str]:
    """
    Build the clause list for a search.

    Args:
        center: Search centre
        radius_meters: Search radius in metres (> 0)
        filters: Selected categories; empty or None selects the default business tags

    Returns:
        List of clause strings, in deterministic order
    """
    radius = normalize_radius(radius_meters)
    selected = parse_filters(filters)

    if not selected:
        selectors = DEFAULT_SELECTORS
    else:
        skipped = [f.value for f in selected if f not in FILTER_CLAUSES]
        if skipped:
            logger.debug("No query clause for categories: %s", ", ".join(skipped))
        selectors = [FILTER_CLAUSES[f] for f in selected if f in FILTER_CLAUSES]

    return [build_clause(selector, center, radius) for selector in selectors]


def build_query(
    center: Coordinate,
    radius_meters: float,
    filters: Optional[Iterable[FilterLike]] = None,
    timeout: int = OVERPASS_QUERY_TIMEOUT,
) -> str:
    """
    Build an Overpass QL query for business nodes around center.

    The query returns JSON with full tag bodies ("out body") for every matched
    node. Identical inputs always produce identical text.

    Args:
        center: Search centre
        radius_meters: Search radius in metres (> 0)
        filters: Selected categories; empty or None selects the default business tags
        timeout: Server-side query timeout in seconds

    Returns:
        Overpass QL query string

    Raises:
        InvalidInputError: for a non-positive radius or an unknown category name
    """
    clauses = build_clauses(center, radius_meters, filters)
    lines = [f"[out:json][timeout:{int(timeout)}];", "("]
    lines.extend(f"  {clause}" for clause in clauses)
    lines.append(");")
    lines.append("out body;")
    return "\n".join(lines) + "\n"
