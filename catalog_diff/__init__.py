# catalog_diff/__init__.py
from .classifier import classify_rows, determine_change_type
from .enricher import enrich_with_menu_items
from .field_parser import parse_attributes_field, parse_field
from .formatter import format_change
from .models import (
    ATTRIBUTES,
    PRICE,
    PRODUCTS,
    SUB_ATTRIBUTES,
    ChangeRecord,
    EntitySnapshot,
    FieldSpec,
    ParsedAttributesField,
    ParsedField,
    get_field_spec,
)
from .normalizer import normalize_row, normalize_rows
from .pipeline import process_file, run_pipeline
from .report import Report, assemble_report, save_report
from .sampler import random_sample, sample_changes

__all__ = [
    "ATTRIBUTES",
    "PRICE",
    "PRODUCTS",
    "SUB_ATTRIBUTES",
    "ChangeRecord",
    "EntitySnapshot",
    "FieldSpec",
    "ParsedAttributesField",
    "ParsedField",
    "Report",
    "assemble_report",
    "classify_rows",
    "determine_change_type",
    "enrich_with_menu_items",
    "format_change",
    "get_field_spec",
    "normalize_row",
    "normalize_rows",
    "parse_attributes_field",
    "parse_field",
    "process_file",
    "random_sample",
    "run_pipeline",
    "sample_changes",
    "save_report",
]
