"""
Business Data Extractor

Flattens the tags of Overpass elements into BusinessRecord rows.

OSM tags are an open-ended key/value map, and one point often carries several
classifying tags (a bakery with a cafe corner is shop=bakery + amenity=cafe).
Each derived field therefore has an ordered list of source keys in
FIELD_PRECEDENCE; the first key with a non-blank value wins.

Examples of element tags:
    name            = "Warung Makan"
    amenity         = "restaurant"
    cuisine         = "indonesian"
    phone           = "+62 21 555-1234"
    addr:street     = "Jalan Sudirman"
    payment:cash    = "yes"
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from ..geo.coordinate import OSM_BASE_URL, Coordinate, parse_coordinate
from ..models import BusinessRecord, RawElement
from .phone import normalize_phone

logger = logging.getLogger(__name__)

# Field name -> tag keys in order of precedence
FIELD_PRECEDENCE: Dict[str, Sequence[str]] = {
    "type": ("shop", "amenity", "office", "leisure", "tourism", "craft"),
    "category": ("cuisine", "shop", "office", "amenity", "craft", "leisure", "tourism"),
    "subcategory": ("healthcare:speciality", "healthcare", "sport", "religion",
                    "vending", "office", "craft"),
    "phone": ("phone", "contact:phone"),
    "mobile": ("mobile", "contact:mobile"),
    "fax": ("fax", "contact:fax"),
    "website": ("website", "contact:website", "url"),
    "email": ("email", "contact:email"),
    "opening_hours": ("opening_hours",),
    "street": ("addr:street",),
    "housenumber": ("addr:housenumber",),
    "city": ("addr:city", "addr:town", "addr:village"),
    "postcode": ("addr:postcode",),
    "country": ("addr:country",),
    "brand": ("brand",),
    "operator": ("operator",),
    "facebook": ("contact:facebook", "facebook"),
    "instagram": ("contact:instagram", "instagram"),
    "twitter": ("contact:twitter", "twitter"),
    "wheelchair": ("wheelchair",),
    "capacity": ("capacity",),
    "building": ("building",),
    "cuisine": ("cuisine",),
    "diet_vegetarian": ("diet:vegetarian",),
    "diet_vegan": ("diet:vegan",),
    "diet_halal": ("diet:halal",),
    "takeaway": ("takeaway",),
    "delivery": ("delivery",),
    "outdoor_seating": ("outdoor_seating",),
    "drive_through": ("drive_through",),
    "internet_access": ("internet_access",),
    "internet_access_fee": ("internet_access:fee",),
    "parking": ("parking",),
}

PHONE_FIELDS = ("phone", "mobile", "fax")

ADDRESS_PARTS = ("street", "housenumber", "city", "postcode", "country")

# (field, label) pairs rendered into the description, in order
DESCRIPTION_PARTS = (
    ("cuisine", "Cuisine"),
    ("brand", "Brand"),
    ("facebook", "Facebook"),
    ("instagram", "Instagram"),
    ("twitter", "Twitter"),
    ("wheelchair", "Wheelchair"),
    ("capacity", "Capacity"),
)

DESCRIPTION_SEPARATOR = " | "
ADDRESS_SEPARATOR = ", "


def first_present(tags: Dict[str, str], keys: Iterable[str]) -> str:
    """Return the first non-blank value among keys, stripped, or ''."""
    for key in keys:
        value = tags.get(key)
        if value is None:
            continue
        value = str(value).strip()
        if value:
            return value
    return ""


def derive_fields(tags: Dict[str, str]) -> Dict[str, str]:
    """Evaluate every precedence chain against tags."""
    derived = {name: first_present(tags, keys) for name, keys in FIELD_PRECEDENCE.items()}
    for name in PHONE_FIELDS:
        derived[name] = normalize_phone(derived[name])
    return derived


def build_address(derived: Dict[str, str]) -> str:
    """Join present address components with ', '."""
    return ADDRESS_SEPARATOR.join(derived[part] for part in ADDRESS_PARTS if derived.get(part))


def build_description(derived: Dict[str, str]) -> str:
    """'Label: value' segments for present fields, joined with ' | '."""
    return DESCRIPTION_SEPARATOR.join(
        f"{label}: {derived[name]}" for name, label in DESCRIPTION_PARTS if derived.get(name)
    )


def extract_payment(tags: Dict[str, str]) -> str:
    """Accepted payment methods from payment:<method>=yes tags, sorted."""
    methods = sorted(
        key.split(":", 1)[1]
        for key, value in tags.items()
        if key.startswith("payment:") and str(value).strip().lower() == "yes"
    )
    return ", ".join(m for m in methods if m)


def element_coordinate(element: RawElement) -> Optional[Coordinate]:
    """Node position, falling back to the computed centre of ways/relations."""
    coordinate = parse_coordinate(element.lat, element.lon)
    if coordinate is None and element.center:
        coordinate = parse_coordinate(element.center.get("lat"), element.center.get("lon"))
    return coordinate


def osm_url(element: RawElement) -> str:
    if element.id is None:
        return ""
    return f"{OSM_BASE_URL}/{element.type}/{element.id}"


def map_element(element: RawElement) -> Optional[BusinessRecord]:
    """
    Map one Overpass element to a BusinessRecord.

    Returns:
        BusinessRecord, or None when the element has no name or no usable position
    """
    tags = element.tags or {}
    name = tags.get("name")
    if name is None or name == "":
        return None

    coordinate = element_coordinate(element)
    if coordinate is None:
        logger.debug("Skipping %s/%s (%r): no usable coordinates", element.type, element.id, name)
        return None

    derived = derive_fields(tags)

    osm_id = element.id
    if osm_id is not None:
        try:
            osm_id = int(osm_id)
        except (TypeError, ValueError):
            pass

    return BusinessRecord(
        name=name,
        coordinate=coordinate,
        address=build_address(derived),
        description=build_description(derived),
        payment=extract_payment(tags),
        google_maps_url=coordinate.google_maps_url(),
        osm_url=osm_url(element),
        osm_id=osm_id,
        tags=dict(tags),
        **derived,
    )


def map_elements(elements: Iterable[RawElement]) -> List[BusinessRecord]:
    """
    Map Overpass elements in order, dropping the ones map_element rejects.

    Args:
        elements: Elements as returned by OverpassClient.fetch()

    Returns:
        List of BusinessRecord, in the same relative order as the elements
    """
    businesses = []
    for element in elements:
        business = map_element(element)
        if business is not None:
            businesses.append(business)
    return businesses
