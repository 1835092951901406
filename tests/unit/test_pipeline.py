"""
Unit tests for the end-to-end change pipeline.
"""
import asyncio
import json
import random

import pytest

from catalog_diff.exceptions import ConfigurationError
from catalog_diff.pipeline import process_file, run_pipeline

MOJITO = {"ItemId": "9001", "ItemName": "Mojito"}


class TestRunPipeline:

    def test_added_row_is_enriched(self, fake_lookup, products_spec):
        lookup = fake_lookup(menus={("137", "443"): [MOJITO]})
        rows = [["", "", "", "443: Bar", "137: Cocktails", "9001: Mojito"]]

        report = asyncio.run(run_pipeline(rows, products_spec, lookup=lookup))

        assert lookup.calls == [("137", "443")]
        assert report.summary == {"total": 1, "added": 1, "removed": 0, "modified": 0, "moved": 0}
        assert report.added[0].menu_item_info == MOJITO
        after = report.to_dict()["changes"]["added"][0]["after"]
        assert after["locationParsed"]["id"] == "443"
        assert after["productParsed"]["id"] == "9001"

    def test_moved_row_is_not_enriched(self, fake_lookup, products_spec):
        lookup = fake_lookup(menus={("137", "555"): [MOJITO]})
        rows = [["443", "137", "9001", "555", "137", "9001"]]

        report = asyncio.run(run_pipeline(rows, products_spec, lookup=lookup))

        assert len(report.moved) == 1
        assert report.moved[0].menu_item_info is None
        assert lookup.calls == []

    def test_without_lookup(self, products_spec, product_rows):
        report = asyncio.run(run_pipeline(product_rows, products_spec))
        assert report.summary == {"total": 4, "added": 1, "removed": 1, "modified": 1, "moved": 1}

    def test_short_rows_are_dropped(self, products_spec):
        rows = [["443: Bar", "137: Cocktails"], ["", "", "", "443: Bar", "137: Cocktails", "9001: Mojito"]]
        report = asyncio.run(run_pipeline(rows, products_spec))
        assert report.total == 1

    def test_price_uses_default_sample_size(self, price_spec):
        rows = [["", "", "", "", "1: L", "2: C", f"{i}: P{i}", "1.00"] for i in range(25)]
        rows += [["1: L", "2: C", f"{100 + i}: Old", "1.00", "", "", "", ""] for i in range(4)]

        report = asyncio.run(run_pipeline(rows, price_spec, rng=random.Random(11)))

        assert len(report.added) == 10
        assert len(report.removed) == 4
        assert report.total == 14

    def test_sample_size_none_keeps_everything(self, price_spec):
        rows = [["", "", "", "", "1: L", "2: C", f"{i}: P{i}", "1.00"] for i in range(25)]
        report = asyncio.run(run_pipeline(rows, price_spec, sample_size=None))
        assert len(report.added) == 25

    def test_explicit_sample_size(self, products_spec):
        rows = [["", "", "", "1: L", "2: C", f"{i}: P{i}"] for i in range(8)]
        report = asyncio.run(run_pipeline(rows, products_spec, sample_size=3, rng=random.Random(2)))
        assert len(report.added) == 3

    def test_drop_unchanged(self, products_spec, product_rows):
        rows = product_rows + [["1: A", "2: B", "3: C", "1: A", "2: B", "3: C"]]
        report = asyncio.run(run_pipeline(rows, products_spec, drop_unchanged=True))
        assert report.total == 4

    def test_invalid_lookup_fails_before_processing(self, products_spec, mocker):
        normalize = mocker.patch("catalog_diff.pipeline.normalize_rows")
        with pytest.raises(ConfigurationError):
            asyncio.run(run_pipeline([], products_spec, lookup=object()))
        normalize.assert_not_called()

    def test_failing_lookup_still_produces_report(self, fake_lookup, products_spec):
        lookup = fake_lookup(failing={("137", "443")})
        rows = [["", "", "", "443: Bar", "137: Cocktails", f"{9000 + i}: Item"] for i in range(3)]

        report = asyncio.run(run_pipeline(rows, products_spec, lookup=lookup))

        assert len(report.added) == 3
        assert lookup.calls == [("137", "443")]
        assert all("menuItemInfo" not in record for record in json.loads(report.to_json())["changes"]["added"])


def test_process_file(tmp_path, attributes_spec):
    path = tmp_path / "attributes.csv"
    path.write_text(
        "Thursday,,,,Friday,,,\n"
        "Location,Category,Product,Attributes,Location,Category,Product,Attributes\n"
        "443: Bar,137: Pizza,9001: Margherita,Regular - Cheese - 1: Mozzarella,"
        "443: Bar,137: Pizza,9001: Margherita,Regular - Cheese - 2: Cheddar\n",
        encoding="utf-8",
    )

    report = process_file(str(path), attributes_spec)

    assert len(report.modified) == 1
    parsed = report.modified[0].after.parsed_field("attributes")
    assert parsed.name == "Cheddar"
    assert parsed.category == "Cheese"
