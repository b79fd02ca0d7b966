"""
Tests for the item catalog.

Run with: pytest tests/test_catalog.py -v
"""

import pytest

from api.store import ItemCatalog


@pytest.fixture
def catalog():
    return ItemCatalog(total_items=2000)


class TestListFastPath:
    """Listing without filter or exclusions."""

    def test_first_page_of_large_catalog(self):
        catalog = ItemCatalog(total_items=1_000_000)
        page = catalog.list(offset=0, limit=10)

        assert page.total == 1_000_000
        assert [item.id for item in page.items] == list(range(1, 11))

    def test_offset_shifts_range(self, catalog):
        page = catalog.list(offset=5, limit=5)
        assert [item.id for item in page.items] == [6, 7, 8, 9, 10]

    def test_last_page_is_clipped(self, catalog):
        page = catalog.list(offset=1995, limit=50)
        assert [item.id for item in page.items] == [1996, 1997, 1998, 1999, 2000]
        assert page.total == 2000

    def test_offset_past_end_is_empty(self, catalog):
        page = catalog.list(offset=5000, limit=10)
        assert page.items == []
        assert page.total == 2000


class TestListScanPath:
    """Listing with a substring filter and/or exclusions."""

    def test_filter_is_substring_match(self, catalog):
        page = catalog.list(filter_id="123", offset=0, limit=50)

        ids = [item.id for item in page.items]
        assert ids == [123, 1123, 1230, 1231, 1232, 1233, 1234, 1235, 1236, 1237, 1238, 1239]
        assert page.total == len(ids)

    def test_filter_pagination_counts_all_matches(self, catalog):
        first = catalog.list(filter_id="123", offset=0, limit=2)
        second = catalog.list(filter_id="123", offset=2, limit=2)

        assert [item.id for item in first.items] == [123, 1123]
        assert [item.id for item in second.items] == [1230, 1231]
        assert first.total == second.total == 12

    def test_exclusions_reduce_total(self, catalog):
        page = catalog.list(offset=0, limit=3, exclude_ids=[1, 3])

        assert [item.id for item in page.items] == [2, 4, 5]
        assert page.total == 1998

    def test_exclusions_apply_before_filter(self, catalog):
        page = catalog.list(filter_id="123", offset=0, limit=50, exclude_ids=[123])

        assert 123 not in [item.id for item in page.items]
        assert page.total == 11


class TestGetByIds:
    def test_in_range_ids_always_resolve(self, catalog):
        for item_id in (1, 999, 2000):
            items = catalog.get_by_ids([item_id])
            assert len(items) == 1
            assert items[0].id == item_id

    def test_unknown_out_of_range_ids_are_omitted(self, catalog):
        assert catalog.get_by_ids([0, -5, 2001]) == []

    def test_created_at_is_stable(self, catalog):
        first = catalog.get_by_ids([42])[0]
        listed = catalog.list(offset=41, limit=1).items[0]
        again = catalog.get_by_ids([42])[0]

        assert first.created_at == listed.created_at == again.created_at

    def test_wire_format(self, catalog):
        data = catalog.get_by_ids([7])[0].to_dict()

        assert data["id"] == 7
        assert data["createdAt"].endswith("Z")


class TestAppend:
    def test_append_out_of_range_ids(self, catalog):
        added = catalog.append([2001, 2002, -1])

        assert added == [2001, 2002, -1]
        items = catalog.get_by_ids([2001, 2002, -1])
        assert [item.id for item in items] == [2001, 2002, -1]
        assert len({item.created_at for item in items}) == 1

    def test_append_skips_known_and_in_range_ids(self, catalog):
        catalog.append([2001])
        added = catalog.append([2001, 5, 2003])

        assert added == [2003]

    def test_appended_items_are_not_listed(self, catalog):
        catalog.append([2001])
        page = catalog.list(offset=1990, limit=50)

        assert 2001 not in [item.id for item in page.items]
        assert page.total == 2000

    def test_has_id(self, catalog):
        catalog.append([3000])

        assert catalog.has_id(1)
        assert catalog.has_id(3000)
        assert not catalog.has_id(3001)
