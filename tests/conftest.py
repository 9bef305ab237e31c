import httpx
import pytest

from osm_finder.config_manager import FinderConfig

NOMINATIM_URL = "https://nominatim.test"
OVERPASS_URL = "https://overpass.test/api/interpreter"

JAKARTA_GEOCODE = [
    {"lat": "-6.2", "lon": "106.8", "display_name": "Jakarta, Indonesia", "type": "city", "osm_id": 6362934},
]

WARUNG_ELEMENT = {
    "type": "node",
    "id": 1,
    "lat": -6.21,
    "lon": 106.81,
    "tags": {"name": "Warung Makan", "amenity": "restaurant", "phone": "+62 21 555-1234"},
}


@pytest.fixture
def config():
    return FinderConfig(
        nominatim_url=NOMINATIM_URL,
        overpass_url=OVERPASS_URL,
        user_agent="OSM-Business-Finder-Tests/1.0",
        proxy_url="",
    )


@pytest.fixture
def mock_client():
    """Build an httpx.Client whose requests are answered by handler(request)."""
    clients = []

    def factory(handler):
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()
