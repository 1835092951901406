# catalog_diff/formatter.py
from __future__ import annotations

import json
from typing import List, Optional, Tuple

from .models import ADDED, MODIFIED, MOVED, REMOVED, ChangeRecord, EntitySnapshot, FieldSpec
from .report import Report

# Order used for console sections
SECTION_ORDER = (ADDED, REMOVED, MOVED, MODIFIED)

_BASE_FIELDS = ("location", "category", "product")


def _detail_fields(record: ChangeRecord, spec: Optional[FieldSpec]) -> Tuple[str, ...]:
    if spec is not None:
        return spec.detail_fields
    return tuple(name for name in record.after.values if name not in _BASE_FIELDS)


def _entry_line(snapshot: EntitySnapshot, details: Tuple[str, ...]) -> str:
    parts = [snapshot.location, snapshot.category, snapshot.product]
    for name in details:
        value = snapshot.get(name)
        parts.append(f"Price: {value}" if name == "price" else value)
    return " | ".join(parts)


def _detail_values(snapshot: EntitySnapshot, details: Tuple[str, ...]) -> str:
    return " | ".join(
        f"Price {snapshot.get(name)}" if name == "price" else snapshot.get(name)
        for name in details
    )


def format_change(record: ChangeRecord, spec: Optional[FieldSpec] = None) -> str:
    """
    Render one change record for console or notification output.

    Args:
        record (ChangeRecord): The record to render.
        spec (FieldSpec): Report shape; inferred from the record's fields when omitted.

    Returns:
        str: A single line for added/removed, a small block for moved/modified.
    """
    before = record.before
    after = record.after
    details = _detail_fields(record, spec)

    if record.change_type == ADDED:
        return f"[ADDED] {_entry_line(after, details)}"

    if record.change_type == REMOVED:
        return f"[REMOVED] {_entry_line(before, details)}"

    if record.change_type == MOVED:
        return (
            f"[MOVED] {before.product}\n"
            f"  From: {before.location} | {before.category}\n"
            f"  To: {after.location} | {after.category}"
        )

    if record.change_type == MODIFIED:
        if not details:
            return (
                f"[MODIFIED] {before.location} | {before.category}\n"
                f"  Before: {before.product}\n"
                f"  After: {after.product}"
            )
        product = before.product
        if after.product != before.product:
            product = f"{before.product} -> {after.product}"
        return (
            f"[MODIFIED] {before.location} | {before.category} | {product}\n"
            f"  Before: {_detail_values(before, details)}\n"
            f"  After: {_detail_values(after, details)}"
        )

    return json.dumps(record.to_dict(), ensure_ascii=False)


def format_summary(report: Report, label: str) -> List[str]:
    return [
        f"=== {label.upper()} CHANGES SUMMARY ===",
        "",
        f"Added: {len(report.added)}",
        f"Removed: {len(report.removed)}",
        f"Modified: {len(report.modified)}",
        f"Moved: {len(report.moved)}",
        f"Total changes: {report.total}",
    ]


def format_report_sections(report: Report, spec: FieldSpec) -> str:
    """Summary block followed by one section per non-empty bucket."""
    lines = format_summary(report, spec.label)
    for change_type in SECTION_ORDER:
        records = report.bucket(change_type)
        if not records:
            continue
        lines.append("")
        lines.append(f"=== {change_type.upper()} {spec.label.upper()} ===")
        lines.extend(format_change(record, spec) for record in records)
    return "\n".join(lines)
