"""
Unit tests for the list view pipeline and row selection.

The pipeline is filter -> sort -> paginate over an already-fetched list.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import pytest

from arudeal.views import ListView, Paginator, Selection, normalize_sort_key, page_window, sort_items


@dataclass
class Row:
    id: str
    name: str
    price: Optional[float] = None
    listed_at: Optional[datetime] = None


def name_matches(row, term):
    return term in row.name.lower()


@pytest.fixture
def rows():
    return [
        Row(str(i), f"{'Toyota' if i % 2 else 'Honda'} {i}", price=1000.0 * i, listed_at=datetime(2024, 1, i + 1))
        for i in range(1, 26)
    ]


class TestSorting:
    def test_price_ascending_and_descending(self, rows):
        assert [r.id for r in sort_items(rows, "price-asc")][:3] == ["1", "2", "3"]
        assert [r.id for r in sort_items(rows, "price-desc")][:3] == ["25", "24", "23"]

    def test_missing_values_go_last(self):
        items = [Row("a", "a"), Row("b", "b", price=5), Row("c", "c", price=1)]
        assert [r.id for r in sort_items(items, "price-asc")] == ["c", "b", "a"]
        assert [r.id for r in sort_items(items, "price-desc")] == ["b", "c", "a"]

    def test_date_sort(self, rows):
        assert sort_items(rows, "date-desc")[0].id == "25"
        assert sort_items(rows, "oldest")[0].id == "1"

    def test_sort_key_aliases(self):
        assert normalize_sort_key("price-low") == "price-asc"
        assert normalize_sort_key("newest") == "date-desc"
        assert normalize_sort_key("bogus") == "date-desc"
        assert normalize_sort_key(None) == "date-desc"

    def test_input_not_modified(self, rows):
        before = [r.id for r in rows]
        sort_items(rows, "price-desc")
        assert [r.id for r in rows] == before


class TestPaginator:
    def test_page_count(self):
        assert Paginator(total_items=25, page_size=12).page_count == 3
        assert Paginator(total_items=0, page_size=12).page_count == 0
        assert Paginator(total_items=24, page_size=12).page_count == 2

    def test_out_of_range_is_no_op(self):
        pager = Paginator(total_items=25, page_size=12, page=2)

        assert pager.go_to(0) is False
        assert pager.go_to(4) is False
        assert pager.go_to(2) is False
        assert pager.page == 2

    def test_prev_next_bounds(self):
        pager = Paginator(total_items=25, page_size=12)
        assert pager.can_prev is False
        assert pager.prev() is False
        assert pager.last() is True
        assert pager.page == 3
        assert pager.can_next is False
        assert pager.next() is False

    def test_slice(self):
        pager = Paginator(total_items=25, page_size=12, page=3)
        assert pager.slice(list(range(25))) == [24]


class TestPageWindow:
    def test_short_lists_show_every_page(self):
        assert page_window(1, 5) == [1, 2, 3, 4, 5]

    def test_ellipses_around_current(self):
        assert page_window(10, 20) == [1, "...", 9, 10, 11, "...", 20]

    def test_near_edges(self):
        assert page_window(1, 20) == [1, 2, "...", 20]
        assert page_window(20, 20) == [1, "...", 19, 20]


class TestListView:
    def test_rows_are_a_subset_of_filtered_items(self, rows):
        view = ListView(rows, matches=name_matches, page_size=5)
        view.set_query("toyota")

        assert set(r.id for r in view.rows) <= set(r.id for r in view.filtered)
        assert all("Toyota" in r.name for r in view.filtered)
        assert len(view.rows) <= 5

    def test_every_page_together_is_the_filtered_list(self, rows):
        view = ListView(rows, matches=name_matches, page_size=4, sort_key="price-asc")
        view.set_query("honda")

        seen = []
        for page in range(1, view.page_count + 1):
            view.go_to(page)
            seen.extend(view.rows)
        assert seen == view.filtered

    def test_search_resets_to_first_page(self, rows):
        view = ListView(rows, matches=name_matches, page_size=5)
        view.go_to(3)
        assert view.page == 3

        view.set_query("honda")

        assert view.page == 1

    def test_query_is_case_insensitive(self, rows):
        view = ListView(rows, matches=name_matches)
        view.set_query("  TOYOTA ")
        assert len(view.filtered) == 13

    def test_blank_query_shows_everything(self, rows):
        view = ListView(rows, matches=name_matches)
        view.set_query("")
        assert len(view.filtered) == 25

    def test_empty_state_message(self, rows):
        view = ListView(rows, matches=name_matches, empty_message="No vehicles found")
        assert view.message is None

        view.set_query("ferrari")

        assert view.is_empty
        assert view.rows == []
        assert view.message == "No vehicles found"

    def test_refetch_keeps_valid_page(self, rows):
        view = ListView(rows, page_size=5)
        view.go_to(2)

        view.set_items(rows)
        assert view.page == 2

        view.set_items(rows[:3])
        assert view.page == 1

    def test_sort_by(self, rows):
        view = ListView(rows, page_size=5)
        view.sort_by("price-desc")
        assert view.rows[0].id == "25"

    def test_patch_updates_in_place(self, rows):
        view = ListView(rows, matches=name_matches)

        assert view.patch("3", name="Renamed") is True
        assert view.patch("missing", name="x") is False

        view.set_query("renamed")
        assert [r.id for r in view.filtered] == ["3"]


class TestSelection:
    def test_toggle(self):
        selection = Selection()
        selection.toggle("a")
        assert "a" in selection
        selection.toggle("a")
        assert not selection

    def test_toggle_all_twice_clears(self):
        selection = Selection()
        visible = ["a", "b", "c"]

        selection.toggle_all(visible)
        assert selection.all_selected(visible)

        selection.toggle_all(visible)
        assert len(selection) == 0

    def test_toggle_all_with_partial_selection_selects_all(self):
        selection = Selection()
        selection.toggle("a")

        selection.toggle_all(["a", "b"])

        assert selection.to_list() == ["a", "b"]

    def test_all_selected_needs_rows(self):
        assert Selection().all_selected([]) is False
