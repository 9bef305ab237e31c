"""
FastAPI Server for OSM Business Finder

Provides API endpoints for:
- Place autocomplete
- Business search around a place
- CSV export of a search

Each browser search replaces the previous result wholesale; the server keeps
no state between requests.
"""

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from .config import API_HOST, API_PORT
from .exceptions import FinderError, InvalidInputError, PlaceNotFoundError, UpstreamError
from .extraction.query import FILTER_CLAUSES, CategoryFilter
from .finder import BusinessFinder

logger = logging.getLogger(__name__)

_finder: Optional[BusinessFinder] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    if _finder is not None:
        _finder.close()


# FastAPI app
app = FastAPI(title="OSM Business Finder API", lifespan=lifespan)

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_finder() -> BusinessFinder:
    """Lazily created finder shared by all requests."""
    global _finder
    if _finder is None:
        _finder = BusinessFinder(verbose=False)
    return _finder


def set_finder(finder: Optional[BusinessFinder]):
    """Replace the shared finder (used by tests and embedding applications)."""
    global _finder
    _finder = finder


# Request Models
class SearchRequest(BaseModel):
    place: str
    radius_meters: Optional[float] = None
    categories: List[str] = Field(default_factory=list)


# Error handling: one message per failure, status by kind
_STATUS_BY_ERROR = (
    (InvalidInputError, 400),
    (PlaceNotFoundError, 404),
    (UpstreamError, 502),
)


@app.exception_handler(FinderError)
async def finder_error_handler(request: Request, exc: FinderError):
    status_code = 500
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            status_code = code
            break
    if status_code >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Collapse pydantic's error list into one message, like FinderError."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        fields = [str(part) for part in first.get("loc", ()) if part not in ("body", "query")]
        message = first.get("msg", "Invalid request")
        if fields:
            message = f"{'.'.join(fields)}: {message}"
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"detail": message})


@app.get("/api/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/api/categories")
def list_categories():
    """Selectable categories. Unmapped ones are accepted but add no clause."""
    return {
        "categories": [
            {"name": f.value, "mapped": f in FILTER_CLAUSES} for f in CategoryFilter
        ]
    }


@app.get("/api/suggest")
def suggest(q: str = "", seq: int = Query(0, ge=0)):
    """Autocomplete a place name. The caller's seq is echoed so it can drop stale responses."""
    suggestions = get_finder().suggest(q)
    return {"seq": seq, "suggestions": [s.to_dict() for s in suggestions]}


@app.post("/api/search")
def search(request: SearchRequest):
    """Search businesses around a place."""
    result = get_finder().search(request.place, request.radius_meters, request.categories)
    return result.to_dict()


@app.post("/api/export")
def export(request: SearchRequest):
    """Search and return the result as a CSV download."""
    finder = get_finder()
    result = finder.search(request.place, request.radius_meters, request.categories)
    data, filename = finder.export_csv(result)
    return Response(
        content=data,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def run_server(host: str = API_HOST, port: int = API_PORT):
    """Run the API server with uvicorn."""
    import uvicorn
    uvicorn.run(app, host=host, port=port)
