# catalog_diff/models.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

ADDED = "added"
REMOVED = "removed"
MODIFIED = "modified"
MOVED = "moved"

CHANGE_TYPES: Tuple[str, ...] = (ADDED, REMOVED, MODIFIED, MOVED)

# Added and modified entries are the only ones resolved against the catalog service
ENRICHABLE_CHANGE_TYPES: FrozenSet[str] = frozenset({ADDED, MODIFIED})

MenuItemInfo = Dict[str, Any]
RawRow = List[str]


def to_camel(name: str) -> str:
    """Convert a snake_case field name into the camelCase key used in report JSON."""
    head, *tail = name.split("_")
    return head + "".join(part.capitalize() for part in tail)


@dataclass(frozen=True)
class ParsedField:
    """
    Identifier and display name split out of a composite "<id>: <name>" cell.

    `raw` always holds the untouched cell value.
    """
    id: str
    name: str
    raw: str

    def to_dict(self) -> Dict[str, str]:
        return {
            'id': self.id,
            'name': self.name,
            'raw': self.raw
        }


@dataclass(frozen=True)
class ParsedAttributesField(ParsedField):
    """Attribute cell of the form "<type> - <category> - <id>: <name> | <price info>"."""
    category: str = ""
    type: str = ""

    def to_dict(self) -> Dict[str, str]:
        data = super().to_dict()
        data['category'] = self.category
        data['type'] = self.type
        return data


@dataclass(frozen=True)
class FieldSpec:
    """
    Describes the column shape of one report type.

    Attributes:
        name (str): Report type identifier (e.g. "price").
        label (str): Human readable name used in console and notification titles.
        fields (tuple): Tracked field names in column order.
        key_field (str): Field whose presence decides added/removed.
        grouping_fields (tuple): Fields whose change marks an entry as moved.
        attributes_fields (frozenset): Fields parsed with the attributes parser.
        default_sample_size (int | None): Cap on non-removed changes before enrichment.
    """
    name: str
    label: str
    fields: Tuple[str, ...]
    key_field: str = "product"
    grouping_fields: Tuple[str, ...] = ("location", "category")
    attributes_fields: FrozenSet[str] = frozenset()
    default_sample_size: Optional[int] = None

    @property
    def field_count(self) -> int:
        return len(self.fields)

    @property
    def detail_fields(self) -> Tuple[str, ...]:
        """Tracked fields that are neither the key nor a grouping field."""
        return tuple(
            name for name in self.fields
            if name != self.key_field and name not in self.grouping_fields
        )

    @property
    def report_filename(self) -> str:
        return f"{self.name.replace('_', '-')}-changes.json"


PRODUCTS = FieldSpec(
    name="products",
    label="Products",
    fields=("location", "category", "product"),
)

PRICE = FieldSpec(
    name="price",
    label="Prices",
    fields=("location", "category", "product", "price"),
    default_sample_size=10,
)

ATTRIBUTES = FieldSpec(
    name="attributes",
    label="Attributes",
    fields=("location", "category", "product", "attributes"),
    attributes_fields=frozenset({"attributes"}),
    default_sample_size=15,
)

SUB_ATTRIBUTES = FieldSpec(
    name="sub_attributes",
    label="Sub-Attributes",
    fields=("location", "category", "product", "attributes", "sub_attributes"),
)

REPORT_TYPES: Dict[str, FieldSpec] = {
    spec.name: spec for spec in (PRODUCTS, PRICE, ATTRIBUTES, SUB_ATTRIBUTES)
}


def get_field_spec(report_type: str) -> FieldSpec:
    """
    Resolve a report type name to its FieldSpec.

    Accepts dashes in place of underscores ("sub-attributes").

    Raises:
        ValueError: If the report type is unknown.
    """
    key = report_type.strip().lower().replace("-", "_")
    if key not in REPORT_TYPES:
        raise ValueError(f"Unsupported report type: {report_type}")
    return REPORT_TYPES[key]


@dataclass(frozen=True)
class EntitySnapshot:
    """State of one catalog entry at a single point in time (before or after)."""
    values: Dict[str, str]
    parsed: Dict[str, ParsedField]

    def get(self, name: str) -> str:
        return self.values.get(name, "")

    def parsed_field(self, name: str) -> ParsedField:
        return self.parsed.get(name) or ParsedField(id="", name="", raw="")

    @property
    def location(self) -> str:
        return self.get("location")

    @property
    def category(self) -> str:
        return self.get("category")

    @property
    def product(self) -> str:
        return self.get("product")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {to_camel(name): value for name, value in self.values.items()}
        for name, parsed in self.parsed.items():
            data[f"{to_camel(name)}Parsed"] = parsed.to_dict()
        return data


@dataclass(frozen=True)
class ChangeRecord:
    """
    A before/after pair with its classification.

    `menu_item_info` is only ever set on added or modified records by the enricher.
    """
    before: EntitySnapshot
    after: EntitySnapshot
    change_type: str
    menu_item_info: Optional[MenuItemInfo] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'before': self.before.to_dict(),
            'after': self.after.to_dict(),
            'changeType': self.change_type
        }
        if self.menu_item_info is not None:
            data['menuItemInfo'] = self.menu_item_info
        return data
