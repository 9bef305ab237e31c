"""
Geographic utilities module.

- coordinate.py: Coordinate type and map links
- nominatim.py: Place resolution and autocomplete via OpenStreetMap Nominatim API
- autocomplete.py: Stale-response handling for suggestion lists
"""

from .coordinate import Coordinate, parse_coordinate
from .nominatim import NominatimClient, PlaceCandidate
from .autocomplete import AutocompleteSession
