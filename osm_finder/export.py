"""
CSV Export

Serializes business records to CSV with human-readable headers. Row numbers
come from iteration position, so the same records always produce the same
file.
"""

import csv
import io
import json
import os
import re
from datetime import date
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .models import BusinessRecord

# (record field, header label)
CSV_COLUMNS: List[Tuple[str, str]] = [
    ("no", "No"),
    ("name", "Name"),
    ("type", "Type"),
    ("category", "Category"),
    ("subcategory", "Subcategory"),
    ("latitude", "Latitude"),
    ("longitude", "Longitude"),
    ("phone", "Phone"),
    ("mobile", "Mobile"),
    ("fax", "Fax"),
    ("address", "Address"),
    ("website", "Website"),
    ("email", "Email"),
    ("opening_hours", "Opening Hours"),
    ("description", "Description"),
    ("brand", "Brand"),
    ("operator", "Operator"),
    ("facebook", "Facebook"),
    ("instagram", "Instagram"),
    ("twitter", "Twitter"),
    ("wheelchair", "Wheelchair"),
    ("capacity", "Capacity"),
    ("building", "Building"),
    ("cuisine", "Cuisine"),
    ("diet_vegetarian", "Vegetarian"),
    ("diet_vegan", "Vegan"),
    ("diet_halal", "Halal"),
    ("takeaway", "Takeaway"),
    ("delivery", "Delivery"),
    ("outdoor_seating", "Outdoor Seating"),
    ("drive_through", "Drive Through"),
    ("internet_access", "Internet Access"),
    ("internet_access_fee", "Internet Access Fee"),
    ("payment", "Payment"),
    ("parking", "Parking"),
    ("google_maps_url", "Google Maps"),
    ("osm_url", "OpenStreetMap"),
    ("osm_id", "OSM ID"),
    ("tags", "Tags"),
]

CSV_HEADERS = [label for _, label in CSV_COLUMNS]


def _cell(value: Any) -> Any:
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, sort_keys=True)
    if value is None:
        return ""
    return value


def business_rows(businesses: Iterable[BusinessRecord]) -> Iterator[Dict[str, Any]]:
    """Yield one {label: value} dict per record, numbered from 1."""
    for index, business in enumerate(businesses):
        data = business.to_dict()
        data["no"] = index + 1
        yield {label: _cell(data.get(field, "")) for field, label in CSV_COLUMNS}


def write_rows(stream, businesses: Iterable[BusinessRecord]):
    """Write the header and one row per record to a text stream."""
    writer = csv.DictWriter(stream, fieldnames=CSV_HEADERS)
    writer.writeheader()
    for row in business_rows(businesses):
        writer.writerow(row)


def to_csv_bytes(businesses: Iterable[BusinessRecord]) -> bytes:
    """
    Render records as a UTF-8 CSV document.

    An empty input yields a header-only document.
    """
    buffer = io.StringIO(newline="")
    write_rows(buffer, businesses)
    return buffer.getvalue().encode("utf-8")


def export_filename(place_text: str, on_date: Optional[date] = None) -> str:
    """Download name for a search, e.g. businesses_jakarta_2024-05-01.csv."""
    on_date = on_date or date.today()
    first_part = (place_text or "").split(",")[0].strip().lower()
    slug = re.sub(r"[^0-9a-z]+", "_", first_part).strip("_") or "place"
    return f"businesses_{slug}_{on_date.isoformat()}.csv"


def write_csv(csv_path: str, businesses: Iterable[BusinessRecord]) -> str:
    """Write records to csv_path, creating parent directories. Returns the path."""
    directory = os.path.dirname(csv_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(csv_path, "w", newline="", encoding="utf-8") as f:
        write_rows(f, businesses)
    return csv_path
