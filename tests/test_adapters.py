"""Unit tests for the listing source adapters."""

from arudeal.adapters import AuctionAdapter, InventoryAdapter, ThirdPartyAdapter, clean_text
from arudeal.schema.listing import ListingSource


THIRD_PARTY_ROW = {
    "id": 11,
    "title": "2019 Honda CR-V LHD",
    "year": 2019,
    "model": "CR-V LHD",
    "price": 21000,
    "miles": 42000,
    "city": "Miami",
    "state": "FL",
    "exteriorColor": "Red",
    "createdAt": "2024-05-01T00:00:00Z",
    "meta_data": {"make": "Honda", "bodyType": "SUV", "fuelType": "Gasoline", "transmission": "Automatic RHD"},
    "images": [{"image_url": "/cr-v.jpg", "is_primary": True}],
}

AUCTION_ROW = {
    "id": 21,
    "year": 2018,
    "make": "Nissan",
    "model_group": "Patrol",
    "model_detail": "Patrol LE",
    "est_retail_value": 30500,
    "odometer": 88000,
    "yard_name": "Orlando North",
    "status": None,
    "is_active": True,
    "is_featured": False,
}


class TestCleanText:
    def test_drive_side_markers_removed(self):
        assert clean_text("2019 Honda CR-V LHD") == "2019 Honda CR-V"
        assert clean_text("rhd Corolla") == "Corolla"
        assert clean_text("CR-V LHD Sport") == "CR-V Sport"

    def test_words_containing_markers_kept(self):
        assert clean_text("Bolhde") == "Bolhde"

    def test_empty(self):
        assert clean_text(None) == ""


class TestInventoryAdapter:
    def test_search_document(self, client):
        adapter = InventoryAdapter(client)
        doc = adapter.to_search_document({
            "id": 1,
            "title": "2020 Toyota Camry LHD",
            "make": {"id": 1, "name": "Toyota"},
            "model": "Camry",
            "year": 2020,
            "slug": "camry-2020",
            "images": [{"image_url": "/camry.jpg"}],
            "badge": {"name": "Certified"},
        })

        assert doc.title == "2020 Toyota Camry"
        assert doc.slug == "camry-2020"
        assert doc.image == "http://media.test/camry.jpg"
        assert doc.badges == ["Certified"]
        assert doc.source is ListingSource.INVENTORY

    def test_fetch_documents_uses_auth(self, client, session):
        session.route("GET", "/car_listing/listing", {"items": [{"id": 1, "title": "A"}]})

        docs = InventoryAdapter(client).fetch_documents(limit=1000)

        assert [d.id for d in docs] == ["1"]
        call = session.calls[0]
        assert call["params"] == {"page": 1, "size": 1000}
        assert "Authorization" in call["headers"]


class TestThirdPartyAdapter:
    def test_search_document_reads_meta_data(self, client):
        doc = ThirdPartyAdapter(client).to_search_document(THIRD_PARTY_ROW)

        assert doc.title == "2019 Honda CR-V"
        assert doc.make.name == "Honda"
        assert doc.model == "CR-V"
        assert doc.body_type.name == "SUV"
        assert doc.transmission.name == "Automatic"
        assert doc.location == "Miami, FL"
        assert doc.mileage == "42000"
        assert doc.color == "Red"
        assert doc.listed_at.year == 2024
        assert doc.image == "http://media.test/cr-v.jpg"

    def test_missing_meta_data(self, client):
        doc = ThirdPartyAdapter(client).to_search_document({"id": 1, "model": "X"})
        assert doc.make.name == "Unknown"
        assert doc.fuel_type.name == "N/A"
        assert doc.location is None

    def test_public_endpoint_is_anonymous(self, client, session):
        session.route("GET", "/api_listing/public", {"items": [THIRD_PARTY_ROW], "total_items": 1})

        page = ThirdPartyAdapter(client).fetch_admin_listings(page=1, size=20)

        assert "Authorization" not in session.calls[0]["headers"]
        row = page.items[0]
        assert row.make == "Honda"
        assert row.body_style == "SUV"
        assert row.source is ListingSource.THIRD_PARTY


class TestAuctionAdapter:
    def test_admin_listing(self, client):
        row = AuctionAdapter(client).to_admin_listing(AUCTION_ROW)

        assert row.title == "2018 Nissan Patrol LE"
        assert row.model == "Patrol LE"
        assert row.price == 30500.0
        assert row.miles == "88000"
        assert row.dealer == "Copart - Orlando North"
        assert row.status == "Pending"

    def test_model_group_fallback(self, client):
        raw = dict(AUCTION_ROW, model_detail=None, yard_name=None, yard_number=None)
        row = AuctionAdapter(client).to_admin_listing(raw)
        assert row.model == "Patrol"
        assert row.dealer == "Copart"

    def test_search_document(self, client):
        doc = AuctionAdapter(client).to_search_document(AUCTION_ROW)
        assert doc.title == "2018 Nissan Patrol LE"
        assert doc.price == 30500.0
        assert doc.source is ListingSource.AUCTION

    def test_repr(self, client):
        assert repr(AuctionAdapter(client)) == "AuctionAdapter(source=auction, endpoint=/copart_listing/admin)"
