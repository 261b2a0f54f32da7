"""
Unit tests for fuzzy search and the catalog search box.

Note: camry_docs, client and session fixtures are provided by conftest.py
"""

import time
from unittest.mock import MagicMock

import pytest

from arudeal.api.errors import NetworkError
from arudeal.schema.listing import ListingSource
from arudeal.search import CatalogSearch, FuzzyIndex, SearchKey, search_route
from arudeal.search.fuzzy import get_value_from_path, match_score
from conftest import make_doc


class TestMatchScore:
    def test_exact_prefix_is_perfect(self):
        assert match_score("camry", "camry") == (0.0, 0)

    def test_one_typo(self):
        score, start = match_score("camri", "camry")
        assert score == pytest.approx(0.2)
        assert start == 0

    def test_distance_penalty(self):
        score, start = match_score("camry", "2020 toyota camry")
        assert start == 12
        assert score == pytest.approx(0.12)

    def test_zero_distance_penalizes_any_displacement(self):
        score, _ = match_score("camry", "2020 toyota camry", distance=0)
        assert score == pytest.approx(1.0)

    def test_no_match(self):
        score, _ = match_score("zzzz", "camry")
        assert score > 0.4

    @pytest.mark.parametrize("pattern,text", [
        ("camri", "camry"),
        ("camry", "2020 toyota camry"),
        ("toyta", "toyota"),
        ("2020", "2020 toyota camry"),
        ("civc", "2018 honda civic"),
    ])
    def test_threshold_does_not_change_matches(self, pattern, text):
        assert match_score(pattern, text, threshold=0.4) == match_score(pattern, text)

    def test_threshold_rejects_without_scanning(self):
        score, _ = match_score("camry", "x" * 100000, threshold=0.4)
        assert score > 0.4

    def test_stops_once_nothing_can_beat_best(self):
        score, start = match_score("camry", "zcamry" + "x" * 200000)
        assert (score, start) == (pytest.approx(0.01), 1)


class TestFuzzyIndex:
    def test_full_title(self, camry_docs):
        results = FuzzyIndex(camry_docs).search("2020 Toyota Camry")
        assert results[0].item.id == "1"

    def test_typo_still_matches(self, camry_docs):
        results = FuzzyIndex(camry_docs).search("Camri")
        assert results[0].item.id == "1"

    def test_terms_in_any_order(self, camry_docs):
        ids = [r.item.id for r in FuzzyIndex(camry_docs).search("Toyota 2020")]
        assert ids[0] == "1"
        assert "2" not in ids

    def test_every_term_must_match(self, camry_docs):
        ids = [r.item.id for r in FuzzyIndex(camry_docs).search("honda patrol")]
        assert ids == []

    def test_blank_query(self, camry_docs):
        assert FuzzyIndex(camry_docs).search("   ") == []

    def test_limit_and_order(self):
        docs = [make_doc(str(i), f"Toyota Corolla {i}", "Toyota", "Corolla", 2015) for i in range(15)]
        results = FuzzyIndex(docs).search("toyota", limit=10)

        assert len(results) == 10
        # equal scores keep input order
        assert [r.ref_index for r in results] == list(range(10))

    def test_full_catalog_keystroke(self, camry_docs):
        models = [("Honda", "Civic"), ("Nissan", "Patrol"), ("Kia", "Rio"), ("Ford", "Focus"), ("Mazda", "CX-5")]
        docs = [
            make_doc(str(100 + i), f"{2000 + i % 25} {make} {model}", make, model, 2000 + i % 25,
                     color=["White", "Black", "Silver"][i % 3])
            for i in range(3000)
            for make, model in [models[i % len(models)]]
        ]
        index = FuzzyIndex(camry_docs[:1] + docs)

        started = time.perf_counter()
        for query in ("Camry", "Toyota 2020", "Camri"):
            assert index.search(query, limit=10)[0].item.id == "1"
        assert time.perf_counter() - started < 1.0

    def test_repeated_terms_are_cached(self, camry_docs):
        index = FuzzyIndex(camry_docs)

        first = [r.item.id for r in index.search("toyota")]
        second = [r.item.id for r in index.search("toyota 2020")]

        assert set(index._term_cache) == {"toyota", "2020"}
        assert first[0] == second[0] == "1"

    def test_custom_keys_on_dicts(self):
        items = [{"name": "Roof Rack"}, {"name": "Floor Mats"}]
        results = FuzzyIndex(items, keys=[SearchKey("name")]).search("mats")
        assert [r.item["name"] for r in results] == ["Floor Mats"]

    def test_value_from_path(self, camry_docs):
        assert get_value_from_path(camry_docs[0], "make.name") == "Toyota"
        assert get_value_from_path({"make": {"name": "Honda"}}, "make.name") == "Honda"
        assert get_value_from_path(camry_docs[0], "badge.name") is None


def _adapter(source, docs=None, error=None):
    adapter = MagicMock()
    adapter.source = source
    if error:
        adapter.fetch_documents.side_effect = error
    else:
        adapter.fetch_documents.return_value = docs or []
    return adapter


class TestCatalogSearch:
    def test_failed_source_is_left_out(self, client, camry_docs):
        adapters = [
            _adapter(ListingSource.INVENTORY, camry_docs[:2]),
            _adapter(ListingSource.THIRD_PARTY, error=NetworkError()),
            _adapter(ListingSource.AUCTION, camry_docs[2:]),
        ]

        search = CatalogSearch(client, adapters=adapters).load()

        assert search.failed_sources == ["third_party"]
        assert len(search.documents) == 3
        assert search.suggest("camri")[0].id == "1"

    def test_sources_fetched_with_limit(self, client):
        adapter = _adapter(ListingSource.INVENTORY)
        CatalogSearch(client, source_limit=250, adapters=[adapter]).load()
        adapter.fetch_documents.assert_called_once_with(limit=250)

    def test_default_adapters_hit_three_endpoints(self, client, session):
        session.route("GET", "/car_listing/listing", {"items": []})
        session.route("GET", "/api_listing/public", {"items": []})
        session.route("GET", "/copart_listing/admin", {"items": []})

        search = CatalogSearch(client).load()

        assert search.failed_sources == []
        assert {c["path"] for c in session.calls} == {
            "/car_listing/listing",
            "/api_listing/public",
            "/copart_listing/admin",
        }

    def test_index_failure_means_no_suggestions(self, client, camry_docs):
        search = CatalogSearch(client, keys=[SearchKey("title", weight="heavy")], adapters=[])
        search.documents = camry_docs

        search.build_index()

        assert search.index is None
        assert search.suggest("camry") == []

    def test_suggestions_capped_at_ten(self, client):
        docs = [make_doc(str(i), f"Toyota Hilux {i}", "Toyota", "Hilux", 2019) for i in range(25)]
        search = CatalogSearch(client, adapters=[_adapter(ListingSource.INVENTORY, docs)]).load()
        assert len(search.suggest("hilux")) == 10

    def test_blank_query_has_no_suggestions(self, client, camry_docs):
        search = CatalogSearch(client, adapters=[_adapter(ListingSource.INVENTORY, camry_docs)]).load()
        assert search.suggest("") == []
        assert search.submit("  ") is None

    def test_submit_route_is_encoded(self, client):
        search = CatalogSearch(client, adapters=[])
        assert search.submit(" toyota 2020 ") == "/listings?search=toyota%202020"
        assert search_route("a&b/c") == "/listings?search=a%26b%2Fc"
