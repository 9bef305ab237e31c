#!/usr/bin/env python
"""
Run the API Server

Starts the FastAPI server for OSM business search.

Usage:
    python run_server.py [--host HOST] [--port PORT]

The server runs on http://localhost:8000 by default

Endpoints:
    GET  /api/health      - Health check
    GET  /api/categories  - Selectable categories
    GET  /api/suggest     - Place autocomplete (?q=...&seq=N)
    POST /api/search      - Search businesses around a place
    POST /api/export      - Same search, returned as a CSV download
"""

import argparse

from osm_finder.config import API_HOST, API_PORT
from osm_finder.server import run_server

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="OSM Business Finder API server")
    parser.add_argument("--host", default=API_HOST)
    parser.add_argument("--port", type=int, default=API_PORT)
    args = parser.parse_args()
    run_server(args.host, args.port)
