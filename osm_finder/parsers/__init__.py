"""
Parsers module for turning Overpass responses into business records.

- phone.py: Phone tag normalization
- business.py: Tag precedence tables and element-to-record mapping
"""

from .phone import normalize_phone
from .business import FIELD_PRECEDENCE, first_present, map_element, map_elements
