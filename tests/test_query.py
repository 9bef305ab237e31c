import math

import pytest

from osm_finder.exceptions import InvalidInputError
from osm_finder.extraction import query as query_module
from osm_finder.extraction.query import (
    DEFAULT_AMENITIES,
    FILTER_CLAUSES,
    CategoryFilter,
    build_clauses,
    build_query,
    parse_filters,
    unmapped_filters,
)
from osm_finder.geo.coordinate import Coordinate

JAKARTA = Coordinate(-6.2, 106.8)


def test_default_query_covers_shop_amenity_office_and_craft():
    clauses = build_clauses(JAKARTA, 5000, set())

    assert clauses == [
        'node["shop"](around:5000,-6.2,106.8);',
        'node["amenity"~"^(' + "|".join(DEFAULT_AMENITIES) + ')$"](around:5000,-6.2,106.8);',
        'node["office"~"^(company|business)$"](around:5000,-6.2,106.8);',
        'node["craft"](around:5000,-6.2,106.8);',
    ]


def test_default_amenity_alternation_is_complete():
    expected = {
        "restaurant", "cafe", "bar", "pub", "fast_food", "food_court", "pharmacy", "bank",
        "clinic", "hospital", "dentist", "doctors", "veterinary", "atm", "marketplace",
        "car_rental", "car_repair", "car_wash", "fuel", "parking", "hotel", "motel",
        "guest_house", "hostel", "hairdresser", "beauty_salon", "laundry", "dry_cleaning",
    }
    assert set(DEFAULT_AMENITIES) == expected


def test_query_requests_json_and_full_bodies():
    text = build_query(JAKARTA, 5000, None)

    assert text.startswith("[out:json][timeout:60];\n(\n")
    assert text.endswith(");\nout body;\n")
    assert "skel" not in text


def test_query_timeout_is_configurable():
    assert build_query(JAKARTA, 5000, None, timeout=25).startswith("[out:json][timeout:25];")


def test_filtered_query_has_one_clause_per_mapped_filter():
    filters = {CategoryFilter.RESTAURANT, CategoryFilter.SHOP, CategoryFilter.SCHOOL}
    clauses = build_clauses(JAKARTA, 2000, filters)

    assert clauses == [
        'node["shop"](around:2000,-6.2,106.8);',
        'node["amenity"="restaurant"](around:2000,-6.2,106.8);',
    ]
    mapped = [f for f in filters if f in FILTER_CLAUSES]
    assert build_query(JAKARTA, 2000, filters).count("node[") == len(mapped)


@pytest.mark.parametrize("category, selector", [
    (CategoryFilter.SUPERMARKET, '["shop"="supermarket"]'),
    (CategoryFilter.MALL, '["building"="mall"]'),
    (CategoryFilter.OFFICE, '["office"~"^(company|business)$"]'),
    (CategoryFilter.HOTEL, '["amenity"="hotel"]'),
    (CategoryFilter.CAR_RENTAL, '["amenity"="car_rental"]'),
])
def test_special_mappings(category, selector):
    assert build_clauses(JAKARTA, 1000, [category]) == [
        f"node{selector}(around:1000,-6.2,106.8);"
    ]


def test_unmapped_filters_are_reported_and_skipped():
    assert unmapped_filters(["school", "university", "cafe"]) == [
        CategoryFilter.SCHOOL, CategoryFilter.UNIVERSITY,
    ]
    assert build_clauses(JAKARTA, 1000, ["school", "university"]) == []
    assert "node[" not in build_query(JAKARTA, 1000, ["school"])


def test_every_category_is_either_mapped_or_reported():
    for category in CategoryFilter:
        clauses = build_clauses(JAKARTA, 1000, [category])
        assert len(clauses) == (0 if category in unmapped_filters([category]) else 1)


def test_output_is_deterministic_regardless_of_selection_order():
    first = build_query(JAKARTA, 5000, ["cafe", "bank", "shop", "mall"])
    second = build_query(JAKARTA, 5000, {"mall", "shop", "bank", "cafe"})
    third = build_query(JAKARTA, 5000, ["mall", "cafe", "shop", "bank", "cafe"])
    assert first == second == third


def test_parse_filters_accepts_names_and_rejects_unknown():
    assert parse_filters(["Car-Rental", " cafe "]) == (CategoryFilter.CAFE, CategoryFilter.CAR_RENTAL)
    assert parse_filters(None) == ()
    assert parse_filters("bar") == (CategoryFilter.BAR,)
    with pytest.raises(InvalidInputError):
        parse_filters(["nightclub"])


@pytest.mark.parametrize("radius", [0, -1, 0.2, math.nan, math.inf, "5000", None, True])
def test_invalid_radius_is_rejected(radius):
    with pytest.raises(InvalidInputError):
        build_query(JAKARTA, radius, None)


def test_radius_is_rounded_to_whole_metres():
    assert "(around:1500," in build_query(JAKARTA, 1499.6, None)


def test_unmapped_filters_logged(caplog):
    with caplog.at_level("DEBUG", logger=query_module.__name__):
        build_clauses(JAKARTA, 1000, ["school", "bar"])
    assert "school" in " ".join(caplog.messages)
