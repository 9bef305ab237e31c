"""
Data types passed between the pipeline stages.

RawElement is Overpass's native shape, read once per search. BusinessRecord
is the flattened output unit. SearchResult bundles one search's records with
the resolved centre.
"""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .geo.coordinate import Coordinate


@dataclass
class RawElement:
    """One element of an Overpass response."""
    id: Optional[int]
    type: str = "node"
    lat: Optional[float] = None
    lon: Optional[float] = None
    tags: Dict[str, str] = field(default_factory=dict)
    center: Optional[Dict[str, float]] = None  # ways/relations queried with "out center"

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "RawElement":
        tags = data.get("tags")
        center = data.get("center")
        return cls(
            id=data.get("id"),
            type=data.get("type") or "node",
            lat=data.get("lat"),
            lon=data.get("lon"),
            tags={str(k): str(v) for k, v in tags.items()} if isinstance(tags, dict) else {},
            center=center if isinstance(center, dict) else None,
        )


@dataclass
class BusinessRecord:
    """A point of interest flattened into one tabular row."""
    name: str
    coordinate: Coordinate
    type: str = ""
    category: str = ""
    subcategory: str = ""
    phone: str = ""
    mobile: str = ""
    fax: str = ""
    address: str = ""
    street: str = ""
    housenumber: str = ""
    city: str = ""
    postcode: str = ""
    country: str = ""
    website: str = ""
    email: str = ""
    opening_hours: str = ""
    description: str = ""
    brand: str = ""
    operator: str = ""
    facebook: str = ""
    instagram: str = ""
    twitter: str = ""
    wheelchair: str = ""
    capacity: str = ""
    building: str = ""
    cuisine: str = ""
    diet_vegetarian: str = ""
    diet_vegan: str = ""
    diet_halal: str = ""
    takeaway: str = ""
    delivery: str = ""
    outdoor_seating: str = ""
    drive_through: str = ""
    internet_access: str = ""
    internet_access_fee: str = ""
    payment: str = ""
    parking: str = ""
    google_maps_url: str = ""
    osm_url: str = ""
    osm_id: Optional[int] = None
    tags: Dict[str, str] = field(default_factory=dict)

    @property
    def latitude(self) -> float:
        return self.coordinate.latitude

    @property
    def longitude(self) -> float:
        return self.coordinate.longitude

    def to_dict(self) -> Dict[str, Any]:
        """Flat dictionary with latitude/longitude in place of the coordinate."""
        data = {}
        for f in fields(self):
            if f.name == "coordinate":
                data["latitude"] = self.latitude
                data["longitude"] = self.longitude
            elif f.name == "tags":
                data["tags"] = dict(self.tags)
            else:
                data[f.name] = getattr(self, f.name)
        return data


class SearchResult:
    """Result object returned by SearchPipeline.search().

    Attributes:
        place: The place text that was searched.
        center: Resolved centre coordinate.
        radius_meters: Search radius in metres.
        filters: Category filters used, in declaration order.
        businesses: Records in upstream order.
    """

    def __init__(
        self,
        place: str,
        center: Coordinate,
        radius_meters: float,
        filters: Tuple = (),
        businesses: Optional[List[BusinessRecord]] = None,
    ):
        self.place = place
        self.center = center
        self.radius_meters = radius_meters
        self.filters = tuple(filters)
        self.businesses: List[BusinessRecord] = list(businesses or [])

    def __len__(self):
        return len(self.businesses)

    def __iter__(self) -> Iterator[BusinessRecord]:
        return iter(self.businesses)

    def __getitem__(self, index):
        return self.businesses[index]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "place": self.place,
            "center": asdict(self.center),
            "radius_meters": self.radius_meters,
            "filters": [getattr(f, "value", f) for f in self.filters],
            "count": len(self.businesses),
            "businesses": [b.to_dict() for b in self.businesses],
        }

    def __repr__(self):
        return f"<SearchResult: {len(self.businesses)} businesses near '{self.place}'>"
