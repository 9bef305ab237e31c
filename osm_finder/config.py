"""
Default configuration for OSM Business Finder.

Module-level defaults read once at import time. Environment variables
override the endpoint URLs, the client identifier and the proxy; everything
else can be overridden per instance through FinderConfig.
"""

import os

# Upstream endpoints
NOMINATIM_URL = os.environ.get(
    "OSM_FINDER_NOMINATIM_URL", "https://nominatim.openstreetmap.org"
).rstrip("/")
OVERPASS_URL = os.environ.get(
    "OSM_FINDER_OVERPASS_URL", "https://overpass-api.de/api/interpreter"
)

# Nominatim's usage policy requires an identifying User-Agent
USER_AGENT = os.environ.get("OSM_FINDER_USER_AGENT", "OSM-Business-Finder/1.0")

# Proxy Configuration (read per call so FinderConfig sees the current environment)
PROXY_HOST_VAR = "OSM_FINDER_PROXY_HOST"
PROXY_USER_VAR = "OSM_FINDER_PROXY_USER"
PROXY_PASS_VAR = "OSM_FINDER_PROXY_PASS"


def get_proxy_url():
    """Get proxy URL. Returns single URL string for httpx, or None."""
    host = os.environ.get(PROXY_HOST_VAR, "")
    user = os.environ.get(PROXY_USER_VAR, "")
    passwd = os.environ.get(PROXY_PASS_VAR, "")
    if host and user and passwd:
        return f"http://{user}:{passwd}@{host}"
    if host:
        return f"http://{host}"
    return None


# HTTP timeouts (seconds)
GEOCODE_TIMEOUT = 30.0
OVERPASS_REQUEST_TIMEOUT = 90.0

# Server-side timeout written into the Overpass query header
OVERPASS_QUERY_TIMEOUT = 60

# Search Parameters (metres)
DEFAULT_RADIUS_METERS = 5000
MIN_RADIUS_METERS = 1000
MAX_RADIUS_METERS = 20000

# Autocomplete
SUGGEST_LIMIT = 5
SUGGEST_MIN_CHARS = 2

# API Server
API_HOST = "0.0.0.0"
API_PORT = 8000

# CSV output
OUTPUT_DIR = "output"
