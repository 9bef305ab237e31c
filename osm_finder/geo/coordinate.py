"""
Coordinates

Geographic point type shared by the geocoder, the query builder and the
business records.
"""

import math
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import urlencode

GOOGLE_MAPS_SEARCH_URL = "https://www.google.com/maps/search/"
OSM_BASE_URL = "https://www.openstreetmap.org"


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 point. Immutable and always finite."""
    latitude: float
    longitude: float

    def __post_init__(self):
        lat = float(self.latitude)
        lon = float(self.longitude)
        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise ValueError(f"Coordinate must be finite, got ({self.latitude}, {self.longitude})")
        if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
            raise ValueError(f"Coordinate out of range: ({lat}, {lon})")
        # frozen dataclass: normalise numeric strings/ints to float
        object.__setattr__(self, "latitude", lat)
        object.__setattr__(self, "longitude", lon)

    def google_maps_url(self) -> str:
        """Link that opens this point in Google Maps."""
        query = urlencode({"api": 1, "query": f"{self.latitude},{self.longitude}"}, safe=",")
        return f"{GOOGLE_MAPS_SEARCH_URL}?{query}"

    def openstreetmap_url(self, zoom: int = 18) -> str:
        """Link that centres the OpenStreetMap viewer on this point with a marker."""
        return (f"{OSM_BASE_URL}/?mlat={self.latitude}&mlon={self.longitude}"
                f"#map={zoom}/{self.latitude}/{self.longitude}")

    def to_dict(self):
        return {"latitude": self.latitude, "longitude": self.longitude}


def parse_coordinate(lat: Any, lon: Any) -> Optional[Coordinate]:
    """
    Build a Coordinate from loosely typed values (numbers or numeric strings).

    Returns:
        Coordinate, or None when either value is missing, unparsable or non-finite
    """
    if lat is None or lon is None or isinstance(lat, bool) or isinstance(lon, bool):
        return None
    try:
        return Coordinate(float(lat), float(lon))
    except (TypeError, ValueError):
        return None
