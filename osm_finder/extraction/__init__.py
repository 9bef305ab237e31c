"""
Extraction module for collecting business data.

- query.py: Build Overpass QL queries from a centre, radius and categories
- overpass.py: Execute queries against the Overpass API
- pipeline.py: Main search orchestration
"""

from .query import CategoryFilter, FILTER_CLAUSES, build_query, parse_filters, unmapped_filters
from .overpass import OverpassClient
from .pipeline import SearchPipeline
