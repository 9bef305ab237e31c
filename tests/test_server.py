import httpx
import pytest
from fastapi.testclient import TestClient

from osm_finder import server
from osm_finder.finder import BusinessFinder

from conftest import JAKARTA_GEOCODE, WARUNG_ELEMENT


class Upstream:
    """Fake Nominatim + Overpass keyed by host."""

    def __init__(self):
        self.geocode = httpx.Response(200, json=JAKARTA_GEOCODE)
        self.overpass = httpx.Response(200, json={"elements": [WARUNG_ELEMENT]})
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        if request.url.host == "nominatim.test":
            return self.geocode
        return self.overpass


@pytest.fixture
def upstream():
    return Upstream()


@pytest.fixture
def client(config, mock_client, upstream):
    finder = BusinessFinder(config, http_client=mock_client(upstream))
    server.set_finder(finder)
    yield TestClient(server.app)
    server.set_finder(None)


def test_health_endpoint(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_categories_flag_unmapped(client):
    categories = {c["name"]: c["mapped"] for c in client.get("/api/categories").json()["categories"]}
    assert categories["restaurant"] is True
    assert categories["mall"] is True
    assert categories["school"] is False
    assert len(categories) == 16


def test_search_returns_businesses(client, upstream):
    response = client.post("/api/search", json={"place": "Jakarta", "radius_meters": 5000})

    assert response.status_code == 200
    payload = response.json()
    assert payload["count"] == 1
    assert payload["center"] == {"latitude": -6.2, "longitude": 106.8}
    business = payload["businesses"][0]
    assert business["name"] == "Warung Makan"
    assert business["phone"] == "+622155551234"
    assert business["tags"]["amenity"] == "restaurant"


def test_search_with_categories(client, upstream):
    response = client.post("/api/search", json={"place": "Jakarta", "categories": ["cafe", "bank"]})

    assert response.status_code == 200
    assert response.json()["filters"] == ["cafe", "bank"]
    query = upstream.requests[-1].content.decode("utf-8")
    assert query.count("node[") == 2


@pytest.mark.parametrize("payload", [
    {"place": ""},
    {"place": "Jakarta", "radius_meters": -5},
    {"place": "Jakarta", "categories": ["casino"]},
])
def test_invalid_input_is_400(client, upstream, payload):
    response = client.post("/api/search", json=payload)

    assert response.status_code == 400
    assert response.json()["detail"]
    assert upstream.requests == []


@pytest.mark.parametrize("payload", [
    {},
    {"place": ["Jakarta"]},
    {"place": "Jakarta", "radius_meters": "far"},
])
def test_malformed_body_is_400_with_one_message(client, upstream, payload):
    response = client.post("/api/search", json=payload)

    assert response.status_code == 400
    assert isinstance(response.json()["detail"], str)
    assert upstream.requests == []


def test_missing_place_names_the_field(client):
    response = client.post("/api/export", json={"categories": ["cafe"]})

    assert response.status_code == 400
    assert response.json()["detail"].startswith("place:")


def test_place_not_found_is_404(client, upstream):
    upstream.geocode = httpx.Response(200, json=[])

    response = client.post("/api/search", json={"place": "Atlantis"})

    assert response.status_code == 404
    assert "Atlantis" in response.json()["detail"]


def test_upstream_failure_is_502(client, upstream):
    upstream.overpass = httpx.Response(504, text="Gateway Timeout")

    response = client.post("/api/search", json={"place": "Jakarta"})

    assert response.status_code == 502
    assert "Overpass" in response.json()["detail"]


def test_export_returns_csv_download(client):
    response = client.post("/api/export", json={"place": "Jakarta"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="businesses_jakarta_' in response.headers["content-disposition"]
    lines = response.content.decode("utf-8").splitlines()
    assert lines[0].startswith("No,Name,Type")
    assert lines[1].startswith("1,Warung Makan,restaurant")


def test_suggest_echoes_sequence(client, upstream):
    response = client.get("/api/suggest", params={"q": "Jak", "seq": 7})

    assert response.status_code == 200
    payload = response.json()
    assert payload["seq"] == 7
    assert payload["suggestions"][0]["display_name"] == "Jakarta, Indonesia"


def test_suggest_never_fails(client, upstream):
    upstream.geocode = httpx.Response(500, text="down")

    response = client.get("/api/suggest", params={"q": "Jak", "seq": 1})

    assert response.status_code == 200
    assert response.json()["suggestions"] == []
