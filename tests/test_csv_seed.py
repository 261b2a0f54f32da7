"""Unit tests for CSV seed validation and export."""

import csv
import io

import pytest

from arudeal.import_export import SeedFileError, detect_delimiter, export_rows, validate_seed_file
from arudeal.schema.listing import AdminListing, ListingSource
from conftest import make_doc


class TestSeedValidation:
    def test_header_returned(self, tmp_path):
        seed = tmp_path / "lots.csv"
        seed.write_text("lot_number;vin;make\n1;ABC;Kia\n", encoding="utf-8")

        assert validate_seed_file(str(seed)) == ["lot_number", "vin", "make"]

    def test_bom_is_ignored(self, tmp_path):
        seed = tmp_path / "lots.csv"
        seed.write_bytes("\ufefflot_number,vin\n".encode("utf-8"))

        assert validate_seed_file(str(seed)) == ["lot_number", "vin"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(SeedFileError, match="not found"):
            validate_seed_file(str(tmp_path / "nope.csv"))

    def test_wrong_extension(self, tmp_path):
        seed = tmp_path / "lots.xlsx"
        seed.write_text("lot\n")
        with pytest.raises(SeedFileError, match=".csv"):
            validate_seed_file(str(seed))

    def test_empty_file(self, tmp_path):
        seed = tmp_path / "lots.csv"
        seed.write_text("")
        with pytest.raises(SeedFileError, match="no header"):
            validate_seed_file(str(seed))

    def test_non_utf8_file(self, tmp_path):
        seed = tmp_path / "lots.csv"
        seed.write_bytes("Make,Modèle\nRenault,Clio\n".encode("latin-1"))

        with pytest.raises(SeedFileError, match="not readable CSV"):
            validate_seed_file(str(seed))

    def test_seed_error_is_a_value_error(self):
        assert issubclass(SeedFileError, ValueError)

    @pytest.mark.parametrize("sample,expected", [
        ("a,b,c", ","),
        ("a\tb\tc", "\t"),
        ("a;b;c", ";"),
        ("single", ","),
    ])
    def test_detect_delimiter(self, sample, expected):
        assert detect_delimiter(sample) == expected


class TestExport:
    def test_search_documents(self, camry_docs):
        content = export_rows(camry_docs[:2])
        rows = list(csv.DictReader(io.StringIO(content)))

        assert len(rows) == 2
        assert rows[0]["title"] == "2020 Toyota Camry"
        assert rows[0]["make"] == "Toyota"
        assert rows[0]["source"] == "inventory"
        assert rows[0]["listed_at"].startswith("2024-03-01")

    def test_dataclass_rows_with_chosen_columns(self):
        listings = [AdminListing(id="1", title="Patrol", make="Nissan", source=ListingSource.AUCTION)]

        content = export_rows(listings, fieldnames=["id", "make", "source"])

        assert content.splitlines() == ["id,make,source", "1,Nissan,auction"]

    def test_dict_rows_and_missing_values(self):
        content = export_rows([{"id": 1, "tags": ["a", "b"], "price": None}])
        rows = list(csv.DictReader(io.StringIO(content)))
        assert rows[0] == {"id": "1", "tags": "a,b", "price": ""}

    def test_nothing_to_export(self):
        assert export_rows([]) == ""

    def test_unpriced_doc(self):
        content = export_rows([make_doc("9", "Mystery", "Kia", "Rio", None)], fieldnames=["id", "price", "year"])
        assert content.splitlines()[1] == "9,,"
