# catalog_diff/field_parser.py
from __future__ import annotations

from typing import Optional

from .models import ParsedAttributesField, ParsedField


def parse_field(raw: Optional[str]) -> ParsedField:
    """
    Split a composite cell such as "418: West Covina" into id and name.

    The split happens on the first colon, so "137: Cocktails - 379: Seasonal"
    yields id "137" and name "Cocktails - 379: Seasonal". A value without a
    colon is all name; a blank value gives empty id and name.

    Args:
        raw (str): The cell value exactly as exported.

    Returns:
        ParsedField: id/name pair with the original value kept in `raw`.
    """
    raw = raw or ""
    if raw.strip() == "":
        return ParsedField(id="", name="", raw=raw)

    head, sep, tail = raw.partition(":")
    if not sep:
        return ParsedField(id="", name=raw.strip(), raw=raw)

    return ParsedField(id=head.strip(), name=tail.strip(), raw=raw)


def parse_attributes_field(raw: Optional[str]) -> ParsedAttributesField:
    """
    Parse an attribute cell: "<type> - <category> - <id>: <name> | <price info>".

    Anything after the first "|" is price/extra information and is ignored for
    the structured parts. The name follows the last colon; the dash separated
    prefix supplies id (last token), category (second to last) and type (first,
    only when there are at least three tokens).

    Example:
        "Regular - Cheese - 101142: Whole-Milk Mozzarella Cheese | price: 1.99"
        -> id "101142", name "Whole-Milk Mozzarella Cheese",
           category "Cheese", type "Regular"
    """
    raw = raw or ""
    if raw.strip() == "":
        return ParsedAttributesField(id="", name="", raw=raw, category="", type="")

    attribute_part = raw.split("|", 1)[0].strip()

    prefix, sep, name = attribute_part.rpartition(":")
    if not sep:
        return ParsedAttributesField(id="", name=attribute_part, raw=raw, category="", type="")

    tokens = [token.strip() for token in prefix.strip().split("-")]
    attribute_id = tokens[-1]
    category = tokens[-2] if len(tokens) >= 2 else ""
    attribute_type = tokens[0] if len(tokens) >= 3 else ""

    return ParsedAttributesField(
        id=attribute_id,
        name=name.strip(),
        raw=raw,
        category=category,
        type=attribute_type,
    )
