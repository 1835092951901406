import pytest

from catalog_diff.field_parser import parse_attributes_field, parse_field
from catalog_diff.models import ParsedAttributesField, ParsedField


class TestParseField:
    """Tests for the "<id>: <name>" parser."""

    def test_splits_id_and_name(self):
        parsed = parse_field("418: West Covina")
        assert parsed == ParsedField(id="418", name="West Covina", raw="418: West Covina")

    def test_empty_and_whitespace_values(self):
        assert parse_field("") == ParsedField(id="", name="", raw="")
        assert parse_field("   ") == ParsedField(id="", name="", raw="   ")

    def test_none_is_treated_as_empty(self):
        assert parse_field(None) == ParsedField(id="", name="", raw="")

    def test_no_colon_is_all_name(self):
        parsed = parse_field("  Happy Hour  ")
        assert parsed.id == ""
        assert parsed.name == "Happy Hour"
        assert parsed.raw == "  Happy Hour  "

    def test_splits_on_first_colon_only(self):
        parsed = parse_field("137: Cocktails - 379: Seasonal")
        assert parsed.id == "137"
        assert parsed.name == "Cocktails - 379: Seasonal"

    def test_raw_keeps_untrimmed_input(self):
        parsed = parse_field(" 9001 :  Mojito ")
        assert parsed.id == "9001"
        assert parsed.name == "Mojito"
        assert parsed.raw == " 9001 :  Mojito "

    @pytest.mark.parametrize("value", [
        "418: West Covina",
        "",
        "no colon here",
        "137: Cocktails - 379: Seasonal",
        ":",
        "  7:  ",
    ])
    def test_idempotent_on_raw(self, value):
        first = parse_field(value)
        assert parse_field(first.raw) == first


class TestParseAttributesField:
    """Tests for the "<type> - <category> - <id>: <name> | <extra>" parser."""

    def test_full_attribute_value(self):
        raw = "Regular - Cheese - 101142: Whole-Milk Mozzarella Cheese | price: 1.99"
        parsed = parse_attributes_field(raw)
        assert parsed == ParsedAttributesField(
            id="101142",
            name="Whole-Milk Mozzarella Cheese",
            raw=raw,
            category="Cheese",
            type="Regular",
        )

    def test_two_tokens_have_no_type(self):
        parsed = parse_attributes_field("Cheese - 101142: Mozzarella")
        assert parsed.id == "101142"
        assert parsed.category == "Cheese"
        assert parsed.type == ""

    def test_single_token_is_only_id(self):
        parsed = parse_attributes_field("101142: Mozzarella")
        assert parsed.id == "101142"
        assert parsed.category == ""
        assert parsed.type == ""
        assert parsed.name == "Mozzarella"

    def test_no_colon_uses_text_before_pipe_as_name(self):
        parsed = parse_attributes_field("Extra Sauce | price: 0.50")
        assert parsed.id == ""
        assert parsed.category == ""
        assert parsed.type == ""
        assert parsed.name == "Extra Sauce"
        assert parsed.raw == "Extra Sauce | price: 0.50"

    def test_name_taken_after_last_colon(self):
        parsed = parse_attributes_field("Regular - Sauce - 7: Ratio: Half")
        assert parsed.name == "Half"
        assert parsed.id == "7: Ratio"
        assert parsed.category == "Sauce"

    def test_empty_value(self):
        assert parse_attributes_field("") == ParsedAttributesField(id="", name="", raw="", category="", type="")

    def test_to_dict_includes_category_and_type(self):
        parsed = parse_attributes_field("Regular - Cheese - 101142: Mozzarella")
        assert parsed.to_dict() == {
            "id": "101142",
            "name": "Mozzarella",
            "raw": "Regular - Cheese - 101142: Mozzarella",
            "category": "Cheese",
            "type": "Regular",
        }
