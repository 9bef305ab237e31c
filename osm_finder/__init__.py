"""
OpenStreetMap Business Finder

A Python library for finding businesses around a place using the
OpenStreetMap Nominatim and Overpass APIs, and exporting them as CSV.

Quick start (library usage):
    from osm_finder import BusinessFinder

    with BusinessFinder() as finder:
        result = finder.search("Jakarta", radius_meters=5000)
        for biz in result:
            print(biz.name, biz.address)

Or compose the pipeline yourself:
    from osm_finder import SearchPipeline
    result = SearchPipeline().search("Jakarta", 5000, ["restaurant", "cafe"])
"""

from .exceptions import (
    FinderError,
    InvalidInputError,
    PlaceNotFoundError,
    UpstreamError,
    ConfigurationError,
)
from .config_manager import FinderConfig
from .geo import Coordinate, NominatimClient, PlaceCandidate, AutocompleteSession
from .models import BusinessRecord, RawElement, SearchResult
from .extraction import CategoryFilter, OverpassClient, SearchPipeline, build_query
from .parsers import map_element, normalize_phone
from .export import CSV_COLUMNS, export_filename, to_csv_bytes
from .finder import BusinessFinder

__version__ = "1.0.0"
__all__ = [
    "BusinessFinder",
    "SearchPipeline",
    "SearchResult",
    "BusinessRecord",
    "RawElement",
    "Coordinate",
    "CategoryFilter",
    "FinderConfig",
    "NominatimClient",
    "OverpassClient",
    "PlaceCandidate",
    "AutocompleteSession",
    "build_query",
    "map_element",
    "normalize_phone",
    "to_csv_bytes",
    "export_filename",
    "CSV_COLUMNS",
    "FinderError",
    "InvalidInputError",
    "PlaceNotFoundError",
    "UpstreamError",
    "ConfigurationError",
]
