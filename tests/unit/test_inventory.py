"""
Unit tests for the inventory aggregator and its CSV contract.
"""

import csv

from sfcc_shopify.inventory import (
    GRAY_ORDER,
    INVENTORY_HEADERS,
    NON_GRAY_ORDER,
    build_inventory,
    inventory_row,
    read_inventory_csv,
    sort_view_keys,
    write_inventory_csv,
)
from sfcc_shopify.models import InventoryRow, ResolvedProduct


def _product(pid, keys, catalog="rocky"):
    return ResolvedProduct(pid, tuple(f"{pid}/{k}.jpg" for k in keys), catalog, views={k: f"{pid}/{k}.jpg" for k in keys})


# ===================
# SORTING TESTS
# ===================

class TestSortViewKeys:
    """Tests for preference-table ordering."""

    def test_non_gray_preference(self):
        keys = ["default_back", "white_front_10x10", "default_main_800x600", "default_lifestyle"]
        assert sort_view_keys(keys, NON_GRAY_ORDER) == [
            "default_main_800x600",
            "default_lifestyle",
            "white_front_10x10",
            "default_back",
        ]

    def test_gray_preference(self):
        keys = ["gray_outsole", "gray_main", "gray_doubleheel_1x1", "gray_profile_800x600"]
        assert sort_view_keys(keys, GRAY_ORDER) == [
            "gray_profile_800x600",
            "gray_main",
            "gray_doubleheel_1x1",
            "gray_outsole",
        ]

    def test_unknown_views_last_by_full_key(self):
        keys = ["default_zeta", "default_7", "default_main", "white_alpha"]
        assert sort_view_keys(keys, NON_GRAY_ORDER) == ["default_main", "default_7", "default_zeta", "white_alpha"]

    def test_same_known_view_keeps_input_order(self):
        keys = ["white_main_10x10", "default_main_800x600", "default_main"]
        assert sort_view_keys(keys, NON_GRAY_ORDER) == keys

    def test_sorting_is_idempotent(self):
        keys = ["default_9", "default_back", "white_main", "default_main_1x1", "default_abc"]
        once = sort_view_keys(keys, NON_GRAY_ORDER)
        assert sort_view_keys(once, NON_GRAY_ORDER) == once


# ===================
# AGGREGATION TESTS
# ===================

class TestBuildInventory:
    """Tests for grouping products into inventory rows."""

    def test_partitions_gray_and_formats_filenames(self):
        row = inventory_row("ABC123", ["gray_main", "default_lifestyle", "white_main", "gray_profile_8x6"])
        assert row == InventoryRow(
            product_id="ABC123",
            gray=("ABC123_gray_profile_8x6.jpg", "ABC123_gray_main.jpg"),
            non_gray=("ABC123_white_main.jpg", "ABC123_default_lifestyle.jpg"),
        )

    def test_groups_by_catalog_and_skips_viewless(self):
        products = [
            _product("A", ["default_main"], "rocky"),
            _product("B", [], "rocky"),
            _product("C", ["gray_main"], "outlet"),
        ]
        inventory = build_inventory(products)
        assert list(inventory) == ["rocky", "outlet"]
        assert [r.product_id for r in inventory["rocky"]] == ["A"]
        assert [r.product_id for r in inventory["outlet"]] == ["C"]

    def test_row_count_matches_products_with_views(self):
        products = [_product(f"P{i}", ["default_main"] if i % 2 else []) for i in range(6)]
        inventory = build_inventory(products)
        assert sum(len(rows) for rows in inventory.values()) == 3

    def test_repeated_product_in_catalog_is_merged(self):
        first = ResolvedProduct("A", ("a1.jpg",), "rocky", views={"default_main": "a1.jpg"})
        second = ResolvedProduct("A", ("a2.jpg", "a3.jpg"), "rocky", views={"default_main": "a2.jpg", "default_back": "a3.jpg"})
        [row] = build_inventory([first, second])["rocky"]
        assert row.non_gray == ("A_default_main.jpg", "A_default_back.jpg")


# ===================
# CSV TESTS
# ===================

class TestInventoryCsv:
    """Tests for writing and reading the inventory export."""

    def test_written_layout(self, tmp_path):
        path = tmp_path / "out" / "rocky_catalog-image-inventory-export.csv"
        rows = [
            InventoryRow("ABC123", gray=("ABC123_gray_main.jpg",), non_gray=("ABC123_default_main.jpg", "ABC123_default_back.jpg")),
            InventoryRow("DEF456", gray=(), non_gray=("DEF456_default_main.jpg",)),
        ]

        assert write_inventory_csv(path, rows) == 2

        with path.open(newline="", encoding="utf-8") as f:
            records = list(csv.reader(f))
        assert records[0] == INVENTORY_HEADERS
        assert records[1] == ["ABC123", "ABC123_default_main.jpg, ABC123_default_back.jpg", "ABC123_gray_main.jpg"]
        assert records[2] == ["DEF456", "DEF456_default_main.jpg", ""]
        assert path.read_text(encoding="utf-8").splitlines()[1].startswith('"ABC123","ABC123_default_main.jpg, ')

    def test_read_skips_blank_lines_and_keeps_lists(self, tmp_path):
        path = tmp_path / "inv.csv"
        path.write_text(
            "productId,nonGrayImageFileNames,grayImageFileNames\n"
            '"A","A_default_main.jpg, A_default_back.jpg",""\n'
            "\n"
            '"B","","B_gray_main.jpg"\n',
            encoding="utf-8",
        )
        rows = read_inventory_csv(path)
        assert rows == [
            InventoryRow("A", gray=(), non_gray=("A_default_main.jpg", "A_default_back.jpg")),
            InventoryRow("B", gray=("B_gray_main.jpg",), non_gray=()),
        ]
