"""Unit tests for row predicates, catalog facets and derived values."""

import pytest

from arudeal.schema.listing import Accessory, AdminListing, Feature, Option, Vehicle
from arudeal.views.filters import (
    CatalogFilters,
    accessory_matches,
    admin_listing_matches,
    catalog_search,
    facet_options,
    filter_accessories,
    listing_stats,
    parse_mileage,
    parse_price_range,
    parse_seat_query,
    price_badge,
    sort_by_make_priority,
    vehicle_matches,
)
from conftest import make_doc


class TestVehicleMatches:
    @pytest.fixture
    def vehicle(self):
        return Vehicle(
            id="1",
            title="2020 Toyota Camry",
            make=Option(name="Toyota"),
            model="Camry",
            price=18500.0,
            vehical_id="VIN123",
            features=[Feature(name="Sunroof", reason="Panoramic glass")],
            location="Oranjestad",
        )

    @pytest.mark.parametrize("term", ["camry", "TOYOTA", "18500", "vin123", "sunroof", "panoramic", "oranje"])
    def test_matches_descriptive_fields(self, vehicle, term):
        assert vehicle_matches(vehicle, term)

    def test_no_match(self, vehicle):
        assert not vehicle_matches(vehicle, "honda")

    def test_admin_listing_searches_title_make_model(self):
        listing = AdminListing(id="1", title="2019 Honda CR-V", make="Honda", model="CR-V", dealer="Copart - Miami")
        assert admin_listing_matches(listing, "cr-v")
        assert not admin_listing_matches(listing, "miami")


class TestAccessoryFilter:
    @pytest.fixture
    def accessories(self):
        return [
            Accessory(id="1", name="Roof Rack", description="Aluminium", category_id="ext"),
            Accessory(id="2", name="Floor Mats", description="Rubber, all weather", category_id="int"),
            Accessory(id="3", name="Seat Covers", description="Leather", category_id="int"),
        ]

    def test_search_and_category(self, accessories):
        assert [a.id for a in filter_accessories(accessories, "rubber")] == ["2"]
        assert [a.id for a in filter_accessories(accessories, category_id="int")] == ["2", "3"]
        assert [a.id for a in filter_accessories(accessories, "seat", "int")] == ["3"]
        assert filter_accessories(accessories, "seat", "ext") == []

    def test_accessory_matches_description(self, accessories):
        assert accessory_matches(accessories[0], "alum")


class TestCatalogSearch:
    @pytest.mark.parametrize("query,seats", [
        ("7 seater", 7),
        ("seven seats", 7),
        ("5", 5),
        ("family car for five", 5),
        ("toyota camry", None),
    ])
    def test_parse_seat_query(self, query, seats):
        assert parse_seat_query(query) == seats

    def test_seat_count_overrides_text(self, camry_docs):
        assert [d.id for d in catalog_search(camry_docs, "7 seater honda")] == ["3"]

    def test_keywords_all_required(self, camry_docs):
        assert [d.id for d in catalog_search(camry_docs, "toyota white")] == ["1"]
        assert catalog_search(camry_docs, "toyota black") == []

    def test_blank_query_returns_all(self, camry_docs):
        assert len(catalog_search(camry_docs, " ")) == 3


class TestCatalogFilters:
    def test_price_range(self):
        assert parse_price_range("3000-12000") == (3000.0, 12000.0)
        assert parse_price_range("cheap") is None
        assert parse_price_range("") is None

    def test_facets_combine(self, camry_docs):
        assert [d.id for d in CatalogFilters(type="sedan").apply(camry_docs)] == ["1", "2"]
        assert [d.id for d in CatalogFilters(type="sedan", price_range="12000-50000").apply(camry_docs)] == ["1", "2"]
        assert [d.id for d in CatalogFilters(make="TOYOTA", fuel_type="gasoline").apply(camry_docs)] == ["1"]
        assert CatalogFilters(color="Green").apply(camry_docs) == []

    def test_price_range_excludes_unpriced(self):
        docs = [make_doc("1", "A", "Kia", "Rio", 2015), make_doc("2", "B", "Kia", "Rio", 2015, price=2000)]
        assert [d.id for d in CatalogFilters(price_range="0-3000").apply(docs)] == ["2"]

    def test_facet_options(self, camry_docs):
        options = facet_options(camry_docs)
        assert options["makes"] == ["Toyota", "Honda", "Nissan"]
        assert options["types"] == ["Sedan", "SUV"]
        assert options["prices"] == ["0-3000", "3000-12000", "12000-50000"]

    def test_make_priority(self):
        docs = [
            make_doc("1", "A", "Kia", "Rio", 2015),
            make_doc("2", "B", "Honda", "Fit", 2015),
            make_doc("3", "C", "Ford", "Focus", 2015),
            make_doc("4", "D", "Toyota", "Yaris", 2015),
        ]
        assert [d.id for d in sort_by_make_priority(docs)] == ["4", "2", "1", "3"]


class TestDerivedValues:
    @pytest.mark.parametrize("price,badge", [
        (9999, "Best Deal"),
        (10000, "Great Price"),
        (24999, "Great Price"),
        (39999, "Good Value"),
        (40000, None),
        (None, None),
    ])
    def test_price_badge(self, price, badge):
        assert price_badge(price) == badge

    @pytest.mark.parametrize("mileage,expected", [
        (42000, (42000.0, "miles")),
        ("12,500 km", (12500.0, "km")),
        ("80000 miles", (80000.0, "miles")),
        ("unknown", (None, "miles")),
        (None, (None, "miles")),
    ])
    def test_parse_mileage(self, mileage, expected):
        assert parse_mileage(mileage) == expected

    def test_listing_stats(self):
        listings = [
            AdminListing(id="1", title="a", make="Toyota", price=1000),
            AdminListing(id="2", title="b", make="Toyota", price=2500),
            AdminListing(id="3", title="c", make="Honda", price=0),
        ]
        stats = listing_stats(listings, total_items=40)
        assert stats.total_value == 3500
        assert stats.count == 40
        assert stats.makes == 2
